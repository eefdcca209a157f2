#!/usr/bin/env python3
"""
SKIPUNCHANGED MUTATOR - In-Place Step Surgery
---------------------------------------------
Applies skip decisions directly to the round-trip step mapping, so the
exporter picks up the change without a second pass. Key order and the
identity of untouched values are preserved.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

import logging
from typing import Any, Mapping, MutableMapping

from ruamel.yaml.comments import merge_attrib

from skipunchanged.core.models import SKIP_IF_UNCHANGED_KEY, SKIP_KEY

logger = logging.getLogger("skipunchanged.mutator")


def mark_skip(step: MutableMapping[str, Any]) -> bool:
    """
    Adds `skip: true` as the last field of the step.

    An existing truthy `skip` (true or a reason string) is left alone; a
    falsy one is flipped to true where it stands. Returns True if the
    step was modified.
    """
    if SKIP_KEY in step:
        if step[SKIP_KEY]:
            logger.debug(f"Step already carries skip={step[SKIP_KEY]!r}; leaving it")
            return False
        step[SKIP_KEY] = True
        return True

    # Assigning a new key on a CommentedMap appends it after the others
    step[SKIP_KEY] = True
    return True


def remove_field(step: MutableMapping[str, Any], key: str = SKIP_IF_UNCHANGED_KEY) -> bool:
    """
    Removes exactly `key` and its value. No-op when absent.
    """
    if key not in step:
        return False
    del step[key]
    return True


def merged_sources_with(step: MutableMapping[str, Any], key: str = SKIP_IF_UNCHANGED_KEY) -> list:
    """
    Returns the mappings merged into `step` through `<<` that carry `key`.

    Removing the key from the step does not touch those anchored mappings,
    so a downstream YAML loader would merge it back in.
    """
    sources = []
    for entry in getattr(step, merge_attrib, None) or []:
        # Older ruamel.yaml stores (position, mapping) pairs
        source = entry[1] if isinstance(entry, tuple) else entry
        if isinstance(source, Mapping) and key in source:
            sources.append(source)
    return sources

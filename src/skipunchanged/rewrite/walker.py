#!/usr/bin/env python3
"""
SKIPUNCHANGED WALKER - Step Tree Traversal
------------------------------------------
Walks the `steps` tree of a pipeline in declaration order. Every child is
classified once as a GROUP, a STEP or something UNRECOGNIZED:

  * GROUP        -> recurse into its nested `steps`; never annotated itself
  * STEP         -> evaluate `skip_if_unchanged`, mark skip, strip directive
  * UNRECOGNIZED -> passed through untouched

The walker never copies nodes. All edits go through the mutator so the
round-trip document reflects them directly.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from skipunchanged.core.errors import MalformedPipelineError, MalformedStepError
from skipunchanged.core.models import (
    GROUP_KEY,
    SKIP_IF_UNCHANGED_KEY,
    STEPS_KEY,
    NodeKind,
    StepDecision,
)
from skipunchanged.rewrite.evaluator import evaluate
from skipunchanged.rewrite.mutator import mark_skip, merged_sources_with, remove_field

logger = logging.getLogger("skipunchanged.walker")

# Fields tried, in order, when naming a step in logs and reports
LABEL_FIELDS = ("label", "name", "key", "command")


def classify(node: Any) -> NodeKind:
    """
    Structural dispatch for a child of a `steps` sequence.

    A mapping with a non-empty `group` is a group; it is only walked when
    its `steps` is a sequence, otherwise it is passed through as-is so a
    group never receives a skip marker.
    """
    if not isinstance(node, Mapping):
        return NodeKind.UNRECOGNIZED

    group = node.get(GROUP_KEY)
    if isinstance(group, str) and group:
        if isinstance(node.get(STEPS_KEY), list):
            return NodeKind.GROUP
        return NodeKind.UNRECOGNIZED

    return NodeKind.STEP


def decode_directive(step: Mapping) -> Optional[List[str]]:
    """
    Reads `skip_if_unchanged` from a step.

    Returns None when the key is absent and an empty list for an explicit
    null or empty sequence. Scalars inside the list are stringified.
    Raises MalformedStepError for any other shape.
    """
    if SKIP_IF_UNCHANGED_KEY not in step:
        return None

    raw = step[SKIP_IF_UNCHANGED_KEY]
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise MalformedStepError(
            f"'{SKIP_IF_UNCHANGED_KEY}' must be a list of glob patterns, got {type(raw).__name__}"
        )

    patterns = []
    for item in raw:
        if item is None or isinstance(item, (Mapping, list)):
            raise MalformedStepError(
                f"'{SKIP_IF_UNCHANGED_KEY}' entries must be glob strings, got {item!r}"
            )
        patterns.append(str(item))
    return patterns


def step_label(step: Mapping) -> Optional[str]:
    for name in LABEL_FIELDS:
        value = step.get(name)
        if isinstance(value, str) and value:
            return value
    return None


def find_steps(document: Any) -> list:
    """
    Returns the top-level `steps` sequence or raises MalformedPipelineError.
    """
    if document is None:
        raise MalformedPipelineError("pipeline document is empty")
    if not isinstance(document, Mapping):
        raise MalformedPipelineError(
            f"pipeline must be a mapping with a '{STEPS_KEY}' key, got {type(document).__name__}"
        )
    if STEPS_KEY not in document:
        raise MalformedPipelineError(f"pipeline has no top-level '{STEPS_KEY}' key")

    steps = document[STEPS_KEY]
    if not isinstance(steps, list):
        raise MalformedPipelineError(
            f"pipeline '{STEPS_KEY}' must be a sequence, got {type(steps).__name__}"
        )
    return steps


class TreeWalker:
    """
    Applies skip decisions across a whole step tree for one changed-file set.
    Decisions and warnings are collected per `process` call.
    """

    def __init__(self, changed_files: Sequence[str]):
        self.changed_files = list(changed_files)
        self.decisions: List[StepDecision] = []
        self.warnings: List[str] = []

    def process(self, document: Any) -> List[StepDecision]:
        """
        Validates the pipeline shape and rewrites every step in place.
        """
        steps = find_steps(document)

        self.decisions = []
        self.warnings = []
        self.process_steps(steps, STEPS_KEY)
        return self.decisions

    def process_steps(self, steps: list, location: str = STEPS_KEY):
        for index, node in enumerate(steps):
            node_location = f"{location}[{index}]"
            kind = classify(node)

            if kind is NodeKind.GROUP:
                logger.debug(f"{node_location}: descending into group {node[GROUP_KEY]!r}")
                self.process_steps(node[STEPS_KEY], f"{node_location}.{STEPS_KEY}")
            elif kind is NodeKind.STEP:
                self._process_step(node, node_location)
            else:
                logger.debug(f"{node_location}: not a step or group, passing through")

    def _process_step(self, step: Any, location: str):
        try:
            patterns = decode_directive(step)
        except MalformedStepError as e:
            message = f"{location}: {e}; step left untouched"
            logger.warning(message)
            self.warnings.append(message)
            return

        if patterns is None:
            return

        if merged_sources_with(step):
            message = (
                f"{location}: '{SKIP_IF_UNCHANGED_KEY}' is inherited through a merge key (<<); "
                f"the anchored mapping keeps it and downstream loaders will merge it back"
            )
            logger.warning(message)
            self.warnings.append(message)

        if not patterns:
            logger.debug(f"{location}: empty '{SKIP_IF_UNCHANGED_KEY}', stripping it")
            remove_field(step)
            return

        match = evaluate(patterns, self.changed_files)
        decision = StepDecision(
            location=location,
            label=step_label(step),
            patterns=patterns,
            skipped=match is None,
            matched=match,
        )

        if decision.skipped:
            mark_skip(step)
        remove_field(step)

        self.decisions.append(decision)
        name = decision.label or location
        if decision.skipped:
            logger.info(f"Skipping {name}: {decision.reason}")
        else:
            logger.info(f"Keeping {name}: {decision.reason}")


def process_pipeline(document: Any, changed_files: Sequence[str]) -> List[StepDecision]:
    """Rewrites `document` in place and returns the step decisions."""
    return TreeWalker(changed_files).process(document)

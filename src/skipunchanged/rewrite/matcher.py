#!/usr/bin/env python3
"""
SKIPUNCHANGED MATCHER - Glob Evaluation
---------------------------------------
Decides whether a changed path matches a shell-style glob. Patterns follow
filesystem glob rules: `*` and `?` stay inside one path segment, `**`
spans any number of directories, and `{a,b}` expands to alternatives.

Matching is performed on the literal path string. Nothing here touches
the filesystem.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

import logging
import re
from typing import Iterable, Optional

from wcmatch import glob
from wcmatch._wcparse import PatternLimitException

logger = logging.getLogger("skipunchanged.matcher")

# GLOBSTAR: `**` crosses directories. BRACE: `{go,mod}` alternatives.
# DOTGLOB: wildcards also match dotfiles. FORCEUNIX and CASE: git paths use
# forward slashes and compare case-sensitively on every platform.
GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.DOTGLOB | glob.FORCEUNIX | glob.CASE


def find_unclosed_class(pattern: str) -> int:
    """
    Returns the index of a `[` that never closes within its path segment,
    or -1 when every character class is well formed.

    wcmatch quietly reads such a bracket as a literal, which would turn a
    typo into an exact-path match.
    """
    i = 0
    length = len(pattern)
    while i < length:
        char = pattern[i]
        if char == '\\':
            i += 2
            continue
        if char != '[':
            i += 1
            continue

        start = i
        i += 1
        if i < length and pattern[i] in '!^':
            i += 1
        # A `]` right after the opener is a member of the class
        if i < length and pattern[i] == ']':
            i += 1
        while i < length and pattern[i] not in ']/':
            i += 2 if pattern[i] == '\\' else 1
        if i >= length or pattern[i] == '/':
            return start
        i += 1
    return -1


def matches(pattern: str, path: str) -> bool:
    """
    Returns True when `path` matches `pattern`.

    Invalid patterns are logged and treated as a miss.
    """
    unclosed = find_unclosed_class(pattern)
    if unclosed != -1:
        logger.warning(
            f"Invalid glob pattern {pattern!r} treated as non-matching: "
            f"unterminated character class at position {unclosed}"
        )
        return False

    try:
        return glob.globmatch(path, pattern, flags=GLOB_FLAGS)
    except (ValueError, re.error, PatternLimitException) as e:
        logger.warning(f"Invalid glob pattern {pattern!r} treated as non-matching: {e}")
        return False


def matches_any(path: str, patterns: Iterable[str]) -> Optional[str]:
    """Returns the first pattern matching `path`, or None."""
    for pattern in patterns:
        if matches(pattern, path):
            return pattern
    return None

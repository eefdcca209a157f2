#!/usr/bin/env python3
"""
SKIPUNCHANGED EVALUATOR - Skip Decisions
----------------------------------------
A step may be skipped only when no changed file matches any of its
declared patterns.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

from typing import Optional, Sequence, Tuple

from skipunchanged.rewrite.matcher import matches_any


def evaluate(patterns: Sequence[str], changed_files: Sequence[str]) -> Optional[Tuple[str, str]]:
    """
    Finds the first (pattern, file) pair that matches, scanning files in
    order. Returns None when nothing matches.
    """
    for path in changed_files:
        pattern = matches_any(path, patterns)
        if pattern is not None:
            return pattern, path
    return None


def should_skip(patterns: Sequence[str], changed_files: Sequence[str]) -> bool:
    """
    True when none of `changed_files` matches any of `patterns`.

    An empty `changed_files` means nothing changed, so every step with a
    pattern list is skipped. Callers do not pass an empty `patterns`.
    """
    return evaluate(patterns, changed_files) is None

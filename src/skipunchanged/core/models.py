#!/usr/bin/env python3
"""
SKIPUNCHANGED CORE MODELS
-------------------------
Defines the fundamental data structures used across the rewrite engine.
A pipeline node is classified once into a NodeKind, and every evaluated
step leaves a StepDecision behind for logging and reporting.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

# Directive consumed by the rewriter; it never reaches the output.
SKIP_IF_UNCHANGED_KEY = "skip_if_unchanged"
# Marker produced for steps that can be bypassed.
SKIP_KEY = "skip"
GROUP_KEY = "group"
STEPS_KEY = "steps"

DEFAULT_PIPELINE_FILE = "pipeline.yml"
DEFAULT_BASE_BRANCH = "origin/main"


class NodeKind(Enum):
    """
    The three shapes a child of a `steps` sequence can take.
    """
    GROUP = "group"
    STEP = "step"
    UNRECOGNIZED = "unrecognized"


@dataclass
class StepDecision:
    """
    The outcome of evaluating a single step's skip directive.

    `matched` holds the first (pattern, file) pair that forced the step
    to run; it is None for skipped steps.
    """
    location: str                   # Path inside the document, e.g. steps[2].steps[0]
    label: Optional[str] = None     # Human-facing name (label/key/command) if any
    patterns: List[str] = field(default_factory=list)
    skipped: bool = False
    matched: Optional[Tuple[str, str]] = None

    @property
    def reason(self) -> str:
        if self.skipped:
            return "no changed file matches " + ", ".join(self.patterns)
        if self.matched:
            pattern, path = self.matched
            return f"{path} matches {pattern}"
        return "no patterns declared"

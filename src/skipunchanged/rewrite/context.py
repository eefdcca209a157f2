#!/usr/bin/env python3
"""
SKIPUNCHANGED REWRITE CONTEXT
-----------------------------
A state object that acts as the record of one rewrite: the raw pipeline,
the parsed round-trip document and what the walker decided about it.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import Any, List

from skipunchanged.core.models import StepDecision


@dataclass
class RewriteContext:
    """
    Maintains the state of a single pipeline rewrite.

    Created by RewritePipeline and filled in by the TreeWalker.
    """
    raw_text: str                                   # Pipeline YAML as read from disk
    changed_files: List[str] = field(default_factory=list)
    document: Any = None                            # ruamel CommentedMap, mutated in place
    decisions: List[StepDecision] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def skipped(self) -> List[StepDecision]:
        return [d for d in self.decisions if d.skipped]

    @property
    def kept(self) -> List[StepDecision]:
        return [d for d in self.decisions if not d.skipped]

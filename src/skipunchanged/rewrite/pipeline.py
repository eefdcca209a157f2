#!/usr/bin/env python3
"""
SKIPUNCHANGED REWRITE PIPELINE - The Coordinator
------------------------------------------------
Turns raw pipeline YAML plus a changed-file list into a rewritten
round-trip document. Parsing uses ruamel.yaml's round-trip loader so
key order, quoting and most comments survive the rewrite.

A document that fails to parse, or lacks a top-level `steps` sequence,
aborts the run before anything is rewritten.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

import logging
from typing import Sequence

from ruamel.yaml import YAML

from skipunchanged.rewrite.context import RewriteContext
from skipunchanged.rewrite.walker import TreeWalker

logger = logging.getLogger("skipunchanged.pipeline")


class RewritePipeline:
    """
    The Orchestrator: load, walk, hand back the context for export.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.preserve_quotes = True

    def load(self, text: str):
        """
        Parses pipeline YAML. ruamel.yaml's YAMLError propagates unchanged
        so the caller sees the parser's own diagnostic.
        """
        # Strip a UTF-8 BOM left behind by editors
        return self.yaml.load(text.lstrip('\ufeff'))

    def run(self, text: str, changed_files: Sequence[str]) -> RewriteContext:
        context = RewriteContext(raw_text=text, changed_files=list(changed_files))
        context.document = self.load(text)

        walker = TreeWalker(context.changed_files)
        context.decisions = walker.process(context.document)
        context.warnings = walker.warnings

        logger.debug(
            f"Rewrite complete: {len(context.skipped)} skipped, "
            f"{len(context.kept)} kept, {len(context.warnings)} warnings"
        )
        return context

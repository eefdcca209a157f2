#!/usr/bin/env python3
"""
SKIPUNCHANGED ENGINE - The Orchestrator
---------------------------------------
SkipEngine drives one invocation end to end: read the pipeline file,
obtain the changed files (from git or from the caller), rewrite the
document and export it. Everything it produces lands in a single result
dictionary that the CLI renders.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from skipunchanged.core.models import StepDecision
from skipunchanged.rewrite.exporter import PipelineExporter
from skipunchanged.rewrite.pipeline import RewritePipeline
from skipunchanged.vcs.changed_files import get_changed_files

logger = logging.getLogger("skipunchanged.engine")


class SkipEngine:
    """
    Principal orchestrator. The changed-file provider is injectable so
    tests and callers can bypass git entirely.
    """

    def __init__(self, changed_files_provider: Callable[[str], List[str]] = get_changed_files):
        self.changed_files_provider = changed_files_provider
        self.pipeline = RewritePipeline()
        self.exporter = PipelineExporter()

    def read_pipeline(self, pipeline_file: str) -> str:
        path = Path(pipeline_file)
        text = path.read_text(encoding='utf-8-sig')
        logger.info(f"Pipeline file read successfully: {path}")
        return text

    def rewrite(self, text: str, changed_files: Sequence[str]) -> Dict[str, Any]:
        """
        Rewrites pipeline text. Malformed documents raise; nothing is
        returned for them.
        """
        context = self.pipeline.run(text, changed_files)
        rendered = self.exporter.export(context.document)

        return {
            "content": rendered,
            "original": context.raw_text,
            "decisions": context.decisions,
            "warnings": context.warnings,
        }

    def process_file(self, pipeline_file: str, base_branch: str,
                     changed_files: Optional[Sequence[str]] = None) -> Dict[str, Any]:
        """
        Full cycle for one pipeline file. When `changed_files` is None the
        provider is asked for the diff against `base_branch`.
        """
        text = self.read_pipeline(pipeline_file)

        if changed_files is None:
            changed_files = self.changed_files_provider(base_branch)

        result = self.rewrite(text, changed_files)
        result["file_path"] = str(pipeline_file)
        return result

    def summarize(self, decisions: List[StepDecision]) -> Dict[str, Any]:
        total = len(decisions)
        skipped = sum(1 for d in decisions if d.skipped)
        return {
            "evaluated": total,
            "skipped": skipped,
            "kept": total - skipped,
        }

#!/usr/bin/env python3
"""
SKIPUNCHANGED CLI
-----------------
Command-line entry point. Reads a Buildkite pipeline, works out which
steps have nothing to rebuild and prints the rewritten pipeline to
stdout, ready to be piped into `buildkite-agent pipeline upload`.

Logs, diffs and reports are written to stderr.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from ruamel.yaml import YAMLError

from skipunchanged.cli.formatter import PipelineFormatter
from skipunchanged.config import BASE_BRANCH_ENV, Settings
from skipunchanged.core.engine import SkipEngine
from skipunchanged.core.errors import SkipUnchangedError
from skipunchanged.core.models import DEFAULT_BASE_BRANCH, DEFAULT_PIPELINE_FILE
from skipunchanged.vcs.changed_files import read_changed_files

VERSION = "0.1.0"

# stdout carries the pipeline; every human-facing message goes here
console = Console(stderr=True)
logger = logging.getLogger("skipunchanged.cli")


class SkipUnchangedCLI:
    """
    CLI wrapper that translates flags into Settings and runs the engine.
    """

    def __init__(self, engine: Optional[SkipEngine] = None):
        self.engine = engine or SkipEngine()
        self.formatter = PipelineFormatter(console)
        self.parser = argparse.ArgumentParser(
            prog="bk-skip-unchanged",
            description="Mark Buildkite steps as skipped when none of their files changed",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="Steps opt in with a 'skip_if_unchanged' list of glob patterns."
        )
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-V", "--version", action="version", version=f"bk-skip-unchanged {VERSION}")
        self.parser.add_argument("pipeline_file", nargs="?", default=DEFAULT_PIPELINE_FILE,
                                 help=f"Path to the pipeline YAML (default: {DEFAULT_PIPELINE_FILE})")
        self.parser.add_argument("--base-branch", default=None,
                                 help=f"Branch to diff against (default: ${BASE_BRANCH_ENV} or {DEFAULT_BASE_BRANCH})")
        self.parser.add_argument("--changed-files", default=None, metavar="PATH",
                                 help="Read changed files from PATH ('-' for stdin) instead of git")
        self.parser.add_argument("-o", "--output", default=None, help="Write the pipeline here instead of stdout")
        self.parser.add_argument("--diff", action="store_true", help="Show original and rewritten pipeline side by side")
        self.parser.add_argument("--report", action="store_true", help="Print a table of step decisions")
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    def _configure_logging(self, level: int):
        root = logging.getLogger("skipunchanged")
        root.setLevel(level)
        if not any(isinstance(h, RichHandler) for h in root.handlers):
            root.addHandler(RichHandler(console=console, show_path=False, log_time_format="%H:%M:%S"))

    def _load_changed_files(self, source: Optional[str]) -> Optional[List[str]]:
        if source is None:
            return None
        if source == "-":
            text = sys.stdin.read()
        else:
            text = Path(source).read_text(encoding="utf-8")
        files = read_changed_files(text)
        logger.info(f"{len(files)} changed file(s) read from {'stdin' if source == '-' else source}")
        return files

    def _write_output(self, content: str, output: Optional[str]):
        if output:
            Path(output).write_text(content, encoding="utf-8")
            logger.info(f"Modified pipeline written to {output}")
        else:
            sys.stdout.write(content)
            sys.stdout.flush()
            logger.info("Modified pipeline written to stdout")

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Parses `argv` and runs one rewrite. Returns the process exit code."""
        args = self.parser.parse_args(argv)
        settings = Settings.from_args(args)
        self._configure_logging(settings.log_level)

        try:
            changed_files = self._load_changed_files(settings.changed_files_source)
            result = self.engine.process_file(
                settings.pipeline_file,
                settings.base_branch,
                changed_files=changed_files,
            )
        except YAMLError as e:
            console.print(f"[bold red]Error:[/bold red] Failed to parse {escape(settings.pipeline_file)}: {escape(str(e))}")
            return 1
        except SkipUnchangedError as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            return 1
        except OSError as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            return 1

        self.formatter.show_warnings(result["warnings"])
        if settings.show_diff:
            self.formatter.show_side_by_side(result["file_path"], result["original"], result["content"])
        if settings.show_report:
            self.formatter.print_decisions(result["decisions"], self.engine.summarize(result["decisions"]))

        try:
            self._write_output(result["content"], settings.output)
        except OSError as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            return 1
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(SkipUnchangedCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(130)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
SKIPUNCHANGED CONFIG
--------------------
Runtime settings resolved from CLI arguments with environment fallbacks.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from skipunchanged.core.models import DEFAULT_BASE_BRANCH, DEFAULT_PIPELINE_FILE

BASE_BRANCH_ENV = "BUILDKITE_PULL_REQUEST_BASE_BRANCH"
LOG_LEVEL_ENV = "SKIP_UNCHANGED_LOG_LEVEL"


@dataclass
class Settings:
    pipeline_file: str = DEFAULT_PIPELINE_FILE
    base_branch: str = DEFAULT_BASE_BRANCH
    changed_files_source: Optional[str] = None   # Path or '-' for stdin; None means ask git
    output: Optional[str] = None                 # None means stdout
    show_diff: bool = False
    show_report: bool = False
    log_level: int = logging.INFO

    @classmethod
    def from_args(cls, args, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Builds settings from an argparse namespace. Explicit flags win over
        the environment, which wins over defaults.
        """
        env = os.environ if environ is None else environ

        base_branch = args.base_branch or env.get(BASE_BRANCH_ENV) or DEFAULT_BASE_BRANCH

        if args.verbose:
            log_level = logging.DEBUG
        else:
            level_name = env.get(LOG_LEVEL_ENV, "INFO").upper()
            log_level = logging.getLevelName(level_name)
            if not isinstance(log_level, int):
                log_level = logging.INFO

        return cls(
            pipeline_file=args.pipeline_file,
            base_branch=base_branch,
            changed_files_source=args.changed_files,
            output=args.output,
            show_diff=args.diff,
            show_report=args.report,
            log_level=log_level,
        )

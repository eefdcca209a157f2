#!/usr/bin/env python3
"""
SKIPUNCHANGED VCS - Changed File Discovery
------------------------------------------
Thin wrapper around the git CLI. Produces the list of files that differ
between the merge base of a branch and HEAD, which is the only input
the rewriter needs from version control.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

import logging
import subprocess
from typing import List, Optional

from skipunchanged.core.errors import GitCommandError, StagedChangesError

logger = logging.getLogger("skipunchanged.vcs")


def _git(args: List[str], cwd: Optional[str] = None) -> str:
    """
    Runs `git <args>` and returns stdout with surrounding whitespace removed.
    Raises GitCommandError on a non-zero exit or a missing git binary.
    """
    logger.debug(f"Running git {' '.join(args)}")
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        raise GitCommandError(args, stderr=str(e)) from e

    if completed.returncode != 0:
        raise GitCommandError(args, stderr=completed.stderr, returncode=completed.returncode)
    return completed.stdout.strip()


def is_dirty(cwd: Optional[str] = None) -> bool:
    """True if `git status --porcelain` reports anything at all."""
    return _git(["status", "--porcelain"], cwd=cwd) != ""


def merge_base(base_branch: str, cwd: Optional[str] = None) -> str:
    """Commit where HEAD diverged from `base_branch`."""
    return _git(["merge-base", base_branch, "HEAD"], cwd=cwd)


def parse_name_status(output: str) -> List[str]:
    """
    Extracts paths from `git diff --name-status` output.

    Fields are tab separated; the last one is the path, so renames and
    copies report their destination.
    """
    files = []
    for line in output.splitlines():
        parts = line.split("\t")
        if len(parts) >= 2 and parts[-1]:
            files.append(parts[-1])
    return files


def get_changed_files(base_branch: str, cwd: Optional[str] = None) -> List[str]:
    """
    Returns the files changed since HEAD branched off `base_branch`.

    Added, copied, modified, renamed and deleted files are reported.
    Raises StagedChangesError if the working tree is not clean.
    """
    if is_dirty(cwd=cwd):
        raise StagedChangesError()

    base = merge_base(base_branch, cwd=cwd)
    logger.debug(f"Merge base with {base_branch}: {base}")

    output = _git(
        ["diff", "--name-status", "--diff-filter=ACMRD", "--find-renames", base, "HEAD"],
        cwd=cwd,
    )
    files = parse_name_status(output)
    logger.info(f"{len(files)} file(s) changed since {base_branch}")
    return files


def read_changed_files(text: str) -> List[str]:
    """
    Parses a newline separated changed-file list, ignoring blank lines.
    Used when the list is supplied by the caller instead of git.
    """
    return [line.strip() for line in text.splitlines() if line.strip()]

#!/usr/bin/env python3
"""
SKIPUNCHANGED ERRORS
--------------------
Exception hierarchy shared by the rewriter, the git collaborator and the CLI.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

from typing import List, Optional


class SkipUnchangedError(Exception):
    """Base class for every error raised by this package."""


class MalformedPipelineError(SkipUnchangedError, ValueError):
    """
    The document parsed but does not have the `{steps: [...]}` shape.
    """


class GitCommandError(SkipUnchangedError):
    """A git invocation exited non-zero or git is not installed."""

    def __init__(self, args: List[str], stderr: Optional[str] = None, returncode: Optional[int] = None):
        self.command = ["git", *args]
        self.stderr = (stderr or "").strip()
        self.returncode = returncode
        message = f"'{' '.join(self.command)}' failed"
        if returncode is not None:
            message += f" with exit code {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class StagedChangesError(SkipUnchangedError):
    """The working tree is dirty, so the diff against the merge base is ambiguous."""

    def __init__(self, message: str = "there are staged changes, please commit or stash them"):
        super().__init__(message)


class MalformedStepError(SkipUnchangedError):
    """
    A step's `skip_if_unchanged` value is not a list of patterns.
    Non-fatal: the walker leaves the node untouched and moves on.
    """

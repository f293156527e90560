# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Minimal git helpers used to commit applied fixes."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final

from .core.process import CommandOptions, run_command
from .orchestration.executor import RunnerCallable

DEFAULT_COMMIT_MESSAGE: Final[str] = "chore: auto-fix quality issues"


def _git(args: Sequence[str], root: Path, runner: RunnerCallable) -> tuple[bool, str]:
    try:
        completed = runner(["git", *args], options=CommandOptions(cwd=root))
    except OSError:
        return False, ""
    return completed.returncode == 0, completed.stdout or ""


def has_uncommitted_changes(root: Path, *, runner: RunnerCallable = run_command) -> bool:
    """Return ``True`` when the working tree at ``root`` has pending changes."""

    succeeded, stdout = _git(("status", "--porcelain"), root, runner)
    return succeeded and bool(stdout.strip())


def stage_all_changes(root: Path, *, runner: RunnerCallable = run_command) -> bool:
    """Stage every change in ``root``; return ``False`` when git fails."""

    succeeded, _ = _git(("add", "-A"), root, runner)
    return succeeded


def commit_changes(
    root: Path,
    message: str = DEFAULT_COMMIT_MESSAGE,
    *,
    runner: RunnerCallable = run_command,
) -> bool:
    """Commit the staged changes in ``root``.

    Args:
        root: Repository directory.
        message: Commit message.
        runner: Command runner.

    Returns:
        bool: ``True`` when the commit succeeded.
    """

    succeeded, _ = _git(("commit", "-m", message), root, runner)
    return succeeded


__all__ = [
    "DEFAULT_COMMIT_MESSAGE",
    "commit_changes",
    "has_uncommitted_changes",
    "stage_all_changes",
]

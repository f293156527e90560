# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the git commit helpers."""

from __future__ import annotations

from pathlib import Path

from tests.helpers.runners import completed
from verifyloop.git import DEFAULT_COMMIT_MESSAGE, commit_changes, has_uncommitted_changes, stage_all_changes

STATUS = ("git", "status", "--porcelain")


def test_uncommitted_changes_detected(runner, tmp_path: Path) -> None:
    runner.script(STATUS, completed(0, " M src/index.ts\n"))

    assert has_uncommitted_changes(tmp_path, runner=runner)
    assert runner.cwds == [tmp_path]


def test_clean_tree_has_no_changes(runner, tmp_path: Path) -> None:
    runner.script(STATUS, completed(0, "\n"))

    assert not has_uncommitted_changes(tmp_path, runner=runner)


def test_git_failure_reports_no_changes(runner, tmp_path: Path) -> None:
    runner.script(STATUS, completed(128, "", "fatal: not a git repository"))

    assert not has_uncommitted_changes(tmp_path, runner=runner)


def test_missing_git_returns_false(runner, tmp_path: Path) -> None:
    runner.script(("git", "add", "-A"), FileNotFoundError("git"))

    assert not stage_all_changes(tmp_path, runner=runner)


def test_commit_uses_default_message(runner, tmp_path: Path) -> None:
    assert commit_changes(tmp_path, runner=runner)
    assert runner.calls == [("git", "commit", "-m", DEFAULT_COMMIT_MESSAGE)]
    assert DEFAULT_COMMIT_MESSAGE == "chore: auto-fix quality issues"


def test_commit_failure_returns_false(runner, tmp_path: Path) -> None:
    runner.script(("git", "commit", "-m", "msg"), completed(1, "nothing to commit"))

    assert not commit_changes(tmp_path, "msg", runner=runner)

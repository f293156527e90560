# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for the verify command."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from verifyloop.checks.catalog import QUALITY_CHECKS
from verifyloop.checks.models import AppliedFix, PendingFix, ProgressLevel, RunResult, RunStatus
from verifyloop.cli.app import app

COMMAND_MODULE = "verifyloop.cli.commands.verify.command"


class _FakeOrchestrator:
    def __init__(self, result: RunResult) -> None:
        self.result = result
        self.calls: list[tuple[Path, object, object]] = []

    def __call__(self, root, options, *, catalog):
        self.calls.append((root, options, catalog))
        if options.on_progress is not None:
            options.on_progress("Validation cycle 1/1", ProgressLevel.INFO)
            options.on_progress("Lint passed (0.10s)", ProgressLevel.SUCCESS)
        return self.result


@pytest.fixture
def orchestrator(monkeypatch) -> _FakeOrchestrator:
    fake = _FakeOrchestrator(RunResult(success=True, status=RunStatus.ALL_PASSED, total_attempts=1))
    monkeypatch.setattr(f"{COMMAND_MODULE}.run_all_checks", fake)
    return fake


def test_verify_passes_defaults_to_orchestrator(orchestrator, tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["verify", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 0, result.stdout
    ((root, options, catalog),) = orchestrator.calls
    assert root == tmp_path.resolve()
    assert not options.auto_fix
    assert not options.dry_run
    assert options.max_retries == 10
    assert options.include_platform_checks
    assert options.platform_selector is None
    assert [check.name for check in catalog.standard] == [check.name for check in QUALITY_CHECKS]
    assert "Quality Verification" in result.stdout
    assert "Lint passed (0.10s)" in result.stdout
    assert "All quality checks passed" in result.stdout
    assert "✅" not in result.stdout


def test_verify_flags_override_configuration(orchestrator, tmp_path: Path) -> None:
    (tmp_path / ".verifyloop.toml").write_text(
        'max_retries = 7\ninclude_platform_checks = false\npackage_manager = "npm"\n',
        encoding="utf-8",
    )

    result = CliRunner().invoke(
        app,
        [
            "verify",
            "--root",
            str(tmp_path),
            "--fix",
            "--max-retries",
            "3",
            "--platform-checks",
            "--platform",
            "wordpress",
        ],
    )

    assert result.exit_code == 0, result.stdout
    ((_, options, catalog),) = orchestrator.calls
    assert options.auto_fix
    assert options.max_retries == 3
    assert options.include_platform_checks
    assert options.platform == "wordpress"
    assert catalog.standard[1].invocation.format() == "npm run lint"


def test_configuration_supplies_unset_flags(orchestrator, tmp_path: Path) -> None:
    (tmp_path / ".verifyloop.toml").write_text("max_retries = 7\nauto_fix = true\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["verify", "--root", str(tmp_path)])

    assert result.exit_code == 0, result.stdout
    ((_, options, _),) = orchestrator.calls
    assert options.max_retries == 7
    assert options.auto_fix


def test_invalid_max_retries_is_a_usage_error(orchestrator, tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["verify", "--root", str(tmp_path), "--max-retries", "0"])

    assert result.exit_code != 0
    assert orchestrator.calls == []


def test_config_error_exits_with_failure(orchestrator, tmp_path: Path) -> None:
    (tmp_path / ".verifyloop.toml").write_text("bogus = 1\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["verify", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.stdout
    assert orchestrator.calls == []


def test_failed_run_exits_with_failure(orchestrator, tmp_path: Path) -> None:
    orchestrator.result = RunResult(success=False, status=RunStatus.BLOCKED, total_attempts=1)

    result = CliRunner().invoke(app, ["verify", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 1
    assert "Verification failed (blocked)" in result.stdout
    assert "Next steps" in result.stdout


def test_dry_run_summary_lists_pending_fixes(orchestrator, tmp_path: Path) -> None:
    lint = QUALITY_CHECKS[1]
    orchestrator.result = RunResult(
        success=False,
        status=RunStatus.DRY_RUN_COMPLETE,
        total_attempts=1,
        pending_fixes=[PendingFix(check=lint, command="pnpm lint --fix")],
    )

    result = CliRunner().invoke(app, ["verify", "--root", str(tmp_path), "--dry-run", "--no-emoji"])

    assert result.exit_code == 1
    ((_, options, _),) = orchestrator.calls
    assert options.dry_run
    assert "DRY-RUN" in result.stdout
    assert "Pending fixes: 1" in result.stdout
    assert "Lint: pnpm lint --fix" in result.stdout


def test_commit_after_fixes(monkeypatch, orchestrator, tmp_path: Path) -> None:
    orchestrator.result = RunResult(
        success=True,
        status=RunStatus.ALL_PASSED,
        total_attempts=2,
        fixes_applied=1,
        applied_fixes=[AppliedFix.for_check(QUALITY_CHECKS[1])],
    )
    actions: list[str] = []
    monkeypatch.setattr(f"{COMMAND_MODULE}.has_uncommitted_changes", lambda root: True)
    monkeypatch.setattr(f"{COMMAND_MODULE}.stage_all_changes", lambda root: actions.append("stage") or True)
    monkeypatch.setattr(f"{COMMAND_MODULE}.commit_changes", lambda root: actions.append("commit") or True)

    result = CliRunner().invoke(app, ["verify", "--root", str(tmp_path), "--fix", "--commit", "--no-emoji"])

    assert result.exit_code == 0, result.stdout
    assert actions == ["stage", "commit"]
    assert "Committed auto-fixes" in result.stdout


def test_commit_failure_exits_with_failure(monkeypatch, orchestrator, tmp_path: Path) -> None:
    orchestrator.result = RunResult(success=True, status=RunStatus.ALL_PASSED, total_attempts=2, fixes_applied=1)
    monkeypatch.setattr(f"{COMMAND_MODULE}.has_uncommitted_changes", lambda root: True)
    monkeypatch.setattr(f"{COMMAND_MODULE}.stage_all_changes", lambda root: True)
    monkeypatch.setattr(f"{COMMAND_MODULE}.commit_changes", lambda root: False)

    result = CliRunner().invoke(app, ["verify", "--root", str(tmp_path), "--commit", "--no-emoji"])

    assert result.exit_code == 1
    assert "Failed to commit changes" in result.stdout


def test_commit_stages_dirty_tree_without_applied_fixes(monkeypatch, orchestrator, tmp_path: Path) -> None:
    actions: list[str] = []
    monkeypatch.setattr(f"{COMMAND_MODULE}.has_uncommitted_changes", lambda root: True)
    monkeypatch.setattr(f"{COMMAND_MODULE}.stage_all_changes", lambda root: actions.append("stage") or True)
    monkeypatch.setattr(f"{COMMAND_MODULE}.commit_changes", lambda root: actions.append("commit") or True)

    result = CliRunner().invoke(app, ["verify", "--root", str(tmp_path), "--commit", "--no-emoji"])

    assert result.exit_code == 0, result.stdout
    assert actions == ["stage", "commit"]
    assert "Committed auto-fixes" in result.stdout


def test_commit_skipped_for_clean_tree(monkeypatch, orchestrator, tmp_path: Path) -> None:
    monkeypatch.setattr(f"{COMMAND_MODULE}.has_uncommitted_changes", lambda root: False)
    monkeypatch.setattr(f"{COMMAND_MODULE}.stage_all_changes", lambda root: pytest.fail("should not stage"))

    result = CliRunner().invoke(app, ["verify", "--root", str(tmp_path), "--commit", "--no-emoji"])

    assert result.exit_code == 0
    assert "nothing to commit" in result.stdout


def test_end_to_end_without_scripts(tmp_path: Path) -> None:
    (tmp_path / ".verifyloop.toml").write_text('disabled_checks = ["typecheck"]\n', encoding="utf-8")

    result = CliRunner().invoke(app, ["verify", "--root", str(tmp_path), "--no-emoji", "--no-platform-checks"])

    assert result.exit_code == 0, result.stdout
    assert "Add scripts to package.json" in result.stdout
    assert "Validation cycles: 0" in result.stdout


def test_version_flag() -> None:
    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.startswith("verifyloop ")

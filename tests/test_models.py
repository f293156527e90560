# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the check and run data model."""

from __future__ import annotations

from datetime import UTC

import pytest
from pydantic import ValidationError

from verifyloop.checks.models import (
    AppliedFix,
    CheckDefinition,
    CheckResult,
    ExecutionOutcome,
    Invocation,
    OutcomeKind,
    RunResult,
    RunStatus,
)


def _lint_check() -> CheckDefinition:
    return CheckDefinition(
        name="lint",
        display_name="Lint",
        invocation=Invocation(command="pnpm", args=("lint",)),
        fix=Invocation(command="pnpm", args=("lint", "--fix")),
        can_auto_fix=True,
        required_script="lint",
    )


def test_invocation_parse_and_format() -> None:
    invocation = Invocation.parse(["tsc", "--noEmit"])

    assert invocation.command == "tsc"
    assert invocation.args == ("--noEmit",)
    assert invocation.argv == ("tsc", "--noEmit")
    assert invocation.format() == "tsc --noEmit"


def test_invocation_parse_rejects_empty_argv() -> None:
    with pytest.raises(ValueError):
        Invocation.parse([])


def test_auto_fix_requires_fix_invocation() -> None:
    with pytest.raises(ValidationError, match="declares no fix invocation"):
        CheckDefinition(
            name="lint",
            display_name="Lint",
            invocation=Invocation(command="pnpm", args=("lint",)),
            can_auto_fix=True,
        )


def test_fix_success_codes_must_not_be_empty() -> None:
    with pytest.raises(ValidationError):
        CheckDefinition(
            name="phpcs",
            display_name="PHP_CodeSniffer",
            invocation=Invocation(command="phpcs", args=(".",)),
            fix_success_codes=(),
        )


def test_with_invocation_returns_copy() -> None:
    check = _lint_check()
    rewritten = check.with_invocation(Invocation.parse(["eslint", "."]))

    assert rewritten.invocation.format() == "eslint ."
    assert check.invocation.format() == "pnpm lint"
    assert rewritten.format_fix_command() == "pnpm lint --fix"


def test_skipped_result_must_be_successful() -> None:
    with pytest.raises(ValidationError, match="must be successful"):
        CheckResult(check=_lint_check(), success=False, skipped=True, skip_reason="nothing to lint")


def test_result_from_failure_outcome_keeps_error() -> None:
    outcome = ExecutionOutcome(kind=OutcomeKind.FAILURE, output="out", error="boom", returncode=2, duration=1.5)

    result = CheckResult.from_outcome(_lint_check(), outcome)

    assert not result.success
    assert not result.skipped
    assert result.error == "boom"
    assert result.duration == 1.5


def test_result_from_skipped_outcome_is_success() -> None:
    outcome = ExecutionOutcome(kind=OutcomeKind.SKIPPED, output="x", returncode=1, skip_reason="No test files found")

    result = CheckResult.from_outcome(_lint_check(), outcome)

    assert result.success
    assert result.skipped
    assert result.skip_reason == "No test files found"
    assert result.error is None


def test_as_skipped_clears_error() -> None:
    failed = CheckResult(check=_lint_check(), success=False, error="boom")

    skipped = failed.as_skipped("No files found to lint (ESLint)")

    assert skipped.success and skipped.skipped
    assert skipped.error is None
    assert skipped.skip_reason == "No files found to lint (ESLint)"


def test_applied_fix_records_command_and_utc_timestamp() -> None:
    fix = AppliedFix.for_check(_lint_check())

    assert fix.check_name == "lint"
    assert fix.command == "pnpm lint --fix"
    assert fix.timestamp.tzinfo is UTC


def test_run_result_defaults() -> None:
    result = RunResult(success=True, status=RunStatus.NO_CHECKS)

    assert result.results == []
    assert result.pending_fixes is None
    assert result.total_attempts == 0

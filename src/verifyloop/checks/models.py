# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models describing checks, their outcomes, and whole verification runs."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Invocation(BaseModel):
    """Executable plus arguments used to launch a check or fix."""

    model_config = ConfigDict(frozen=True)

    command: str = Field(min_length=1)
    args: tuple[str, ...] = ()

    @classmethod
    def parse(cls, argv: Sequence[str]) -> Invocation:
        """Build an invocation from an argv-style sequence.

        Args:
            argv: Command followed by its arguments.

        Returns:
            Invocation: Invocation whose command is the head of ``argv``.

        Raises:
            ValueError: If ``argv`` is empty.
        """

        if not argv:
            raise ValueError("an invocation requires at least a command")
        head, *rest = argv
        return cls(command=head, args=tuple(rest))

    @property
    def argv(self) -> tuple[str, ...]:
        """Return the invocation as a single argv tuple."""

        return (self.command, *self.args)

    def format(self) -> str:
        """Return the invocation rendered for display."""

        return " ".join(self.argv)


class CheckDefinition(BaseModel):
    """Immutable descriptor for a single quality check.

    ``required_script`` names the manifest script the primary invocation relies
    on; ``fallback`` is substituted when that script is missing but the
    fallback executable is installed. ``fix_success_codes`` lists the exit codes
    the fix invocation reports when it repaired everything it could.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    display_name: str = Field(min_length=1)
    invocation: Invocation
    fix: Invocation | None = None
    can_auto_fix: bool = False
    required_script: str | None = None
    fallback: Invocation | None = None
    fix_success_codes: tuple[int, ...] = (0,)
    platform: str | None = None

    @model_validator(mode="after")
    def _require_fix_for_auto_fix(self) -> CheckDefinition:
        """Reject auto-fixable checks that do not declare a fix invocation.

        Returns:
            CheckDefinition: The validated definition.

        Raises:
            ValueError: If ``can_auto_fix`` is set without a ``fix`` invocation.
        """

        if self.can_auto_fix and self.fix is None:
            raise ValueError(f"check '{self.name}' can auto-fix but declares no fix invocation")
        return self

    @field_validator("fix_success_codes")
    @classmethod
    def _require_success_codes(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if not value:
            raise ValueError("fix_success_codes must contain at least one exit code")
        return value

    def with_invocation(self, invocation: Invocation) -> CheckDefinition:
        """Return a copy of the check whose primary invocation is ``invocation``."""

        return self.model_copy(update={"invocation": invocation})

    def format_fix_command(self) -> str:
        """Return the fix command rendered for display, or an empty string."""

        return self.fix.format() if self.fix is not None else ""


class OutcomeKind(str, Enum):
    """Classification applied to every check or fix execution."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILURE = "failure"


class ExecutionOutcome(BaseModel):
    """Tagged result of running one subprocess for a check or a fix."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    output: str = ""
    error: str | None = None
    returncode: int | None = None
    duration: float = 0.0
    skip_reason: str | None = None

    @property
    def passed(self) -> bool:
        """Return ``True`` for success and skip outcomes."""

        return self.kind is not OutcomeKind.FAILURE


class CheckResult(BaseModel):
    """Outcome of executing one check.

    A skipped result is always a successful one: skips describe "nothing to
    check", never a defect.
    """

    model_config = ConfigDict(frozen=True)

    check: CheckDefinition
    success: bool
    output: str = ""
    error: str | None = None
    duration: float = 0.0
    skipped: bool = False
    skip_reason: str | None = None

    @model_validator(mode="after")
    def _skips_are_successes(self) -> CheckResult:
        if self.skipped and not self.success:
            raise ValueError("a skipped check result must be successful")
        return self

    @classmethod
    def from_outcome(cls, check: CheckDefinition, outcome: ExecutionOutcome) -> CheckResult:
        """Build a result for ``check`` from a classified execution outcome.

        Args:
            check: Check whose primary invocation produced ``outcome``.
            outcome: Classified execution outcome.

        Returns:
            CheckResult: Result mirroring the outcome classification.
        """

        return cls(
            check=check,
            success=outcome.passed,
            output=outcome.output,
            error=outcome.error if outcome.kind is OutcomeKind.FAILURE else None,
            duration=outcome.duration,
            skipped=outcome.kind is OutcomeKind.SKIPPED,
            skip_reason=outcome.skip_reason,
        )

    def as_skipped(self, reason: str | None) -> CheckResult:
        """Return a copy of the result reclassified as a successful skip."""

        return self.model_copy(
            update={"success": True, "skipped": True, "skip_reason": reason, "error": None},
        )


class AppliedFix(BaseModel):
    """Record of a fix that was executed and accepted."""

    model_config = ConfigDict(frozen=True)

    check_name: str
    display_name: str
    command: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def for_check(cls, check: CheckDefinition) -> AppliedFix:
        """Return an applied-fix record for ``check`` stamped with the current time."""

        return cls(
            check_name=check.name,
            display_name=check.display_name,
            command=check.format_fix_command(),
        )


class PendingFix(BaseModel):
    """Fix that a dry run would have executed."""

    model_config = ConfigDict(frozen=True)

    check: CheckDefinition
    command: str


class RunStatus(str, Enum):
    """Terminal state reached by the cycle controller."""

    ALL_PASSED = "all_passed"
    NO_CHECKS = "no_checks"
    BLOCKED = "blocked"
    FIX_FAILED = "fix_failed"
    DRY_RUN_COMPLETE = "dry_run_complete"
    MAX_RETRIES_EXCEEDED = "max_retries_exceeded"
    PLATFORM_FAILED = "platform_failed"


class RunResult(BaseModel):
    """Terminal output of a full orchestration run."""

    model_config = ConfigDict(validate_assignment=True)

    success: bool
    status: RunStatus
    results: list[CheckResult] = Field(default_factory=list)
    total_attempts: int = 0
    fixes_applied: int = 0
    applied_fixes: list[AppliedFix] = Field(default_factory=list)
    pending_fixes: list[PendingFix] | None = None
    unavailable_checks: list[CheckDefinition] = Field(default_factory=list)
    platform_results: list[CheckResult] = Field(default_factory=list)


class ProgressLevel(str, Enum):
    """Severity attached to progress notifications."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


ProgressCallback = Callable[[str, ProgressLevel], None]


__all__ = [
    "AppliedFix",
    "CheckDefinition",
    "CheckResult",
    "ExecutionOutcome",
    "Invocation",
    "OutcomeKind",
    "PendingFix",
    "ProgressCallback",
    "ProgressLevel",
    "RunResult",
    "RunStatus",
]

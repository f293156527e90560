# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run checks and their fixes as subprocesses and classify the outcome."""

from __future__ import annotations

import time
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final, Protocol

from ..checks.models import CheckDefinition, CheckResult, ExecutionOutcome, Invocation, OutcomeKind
from ..checks.skips import SKIPPABLE_ERROR_PATTERNS, SkippablePattern, match_skippable
from ..core.process import CommandOptions, run_command

MISSING_EXECUTABLE_RETURNCODE: Final[int] = 127
DEFAULT_FAILURE_MESSAGE: Final[str] = "Check failed"
NO_AUTO_FIX_MESSAGE: Final[str] = "Check does not support auto-fix"


class RunnerCallable(Protocol):
    """Callable protocol for launching an external command."""

    def __call__(
        self,
        args: Sequence[str],
        *,
        options: CommandOptions | None = None,
    ) -> CompletedProcess[str]:
        """Execute ``args`` and return the completed process."""
        ...


def merge_output(stdout: str | None, stderr: str | None) -> str:
    """Return stdout and stderr merged into one text stream.

    Args:
        stdout: Captured standard output.
        stderr: Captured standard error.

    Returns:
        str: Non-empty streams joined by a newline.
    """

    parts = [part.rstrip("\n") for part in (stdout, stderr) if part]
    return "\n".join(parts)


def classify(
    returncode: int,
    stdout: str | None,
    stderr: str | None,
    *,
    success_codes: Collection[int] = (0,),
    patterns: tuple[SkippablePattern, ...] = SKIPPABLE_ERROR_PATTERNS,
    duration: float = 0.0,
) -> ExecutionOutcome:
    """Classify a finished process as success, skip, or failure.

    Args:
        returncode: Exit status reported by the process.
        stdout: Captured standard output.
        stderr: Captured standard error.
        success_codes: Exit codes that count as success.
        patterns: Ordered skippable-output patterns.
        duration: Wall clock seconds spent running the process.

    Returns:
        ExecutionOutcome: Tagged outcome describing the execution.
    """

    output = merge_output(stdout, stderr)
    if returncode in success_codes:
        return ExecutionOutcome(kind=OutcomeKind.SUCCESS, output=output, returncode=returncode, duration=duration)
    reason = match_skippable(output, patterns)
    if reason is not None:
        return ExecutionOutcome(
            kind=OutcomeKind.SKIPPED,
            output=output,
            returncode=returncode,
            duration=duration,
            skip_reason=reason,
        )
    return ExecutionOutcome(
        kind=OutcomeKind.FAILURE,
        output=output,
        error=stderr or output or DEFAULT_FAILURE_MESSAGE,
        returncode=returncode,
        duration=duration,
    )


@dataclass(slots=True)
class CheckExecutor:
    """Execute check and fix invocations inside a project directory.

    Process launch problems never escape: a missing executable or a permission
    error becomes a failure outcome so the controller sees uniform results.
    """

    runner: RunnerCallable = run_command
    clock: Callable[[], float] = time.perf_counter
    patterns: tuple[SkippablePattern, ...] = SKIPPABLE_ERROR_PATTERNS
    options: CommandOptions = field(default_factory=CommandOptions)

    def run_check(self, check: CheckDefinition, root: Path) -> CheckResult:
        """Run the primary invocation of ``check`` and classify it.

        Args:
            check: Check to execute.
            root: Project directory used as the working directory.

        Returns:
            CheckResult: Classified result including the elapsed duration.
        """

        outcome = self.execute(check.invocation, root)
        return CheckResult.from_outcome(check, outcome)

    def apply_fix(self, check: CheckDefinition, root: Path) -> ExecutionOutcome:
        """Run the fix invocation of ``check`` and classify it.

        Args:
            check: Check whose fix should run.
            root: Project directory used as the working directory.

        Returns:
            ExecutionOutcome: Success when the fix exited with one of the check's
            ``fix_success_codes``, skipped when the fixer found nothing to do,
            failure otherwise.
        """

        if not check.can_auto_fix or check.fix is None:
            return ExecutionOutcome(kind=OutcomeKind.FAILURE, error=NO_AUTO_FIX_MESSAGE, output=NO_AUTO_FIX_MESSAGE)
        return self.execute(check.fix, root, success_codes=check.fix_success_codes)

    def execute(
        self,
        invocation: Invocation,
        root: Path,
        *,
        success_codes: Collection[int] = (0,),
    ) -> ExecutionOutcome:
        """Launch ``invocation`` in ``root`` and classify its completion.

        Args:
            invocation: Command and arguments to execute.
            root: Working directory for the subprocess.
            success_codes: Exit codes treated as success.

        Returns:
            ExecutionOutcome: Tagged execution outcome.
        """

        started = self.clock()
        try:
            completed = self.runner(invocation.argv, options=self.options.with_cwd(root))
        except FileNotFoundError as exc:
            return self._launch_failure(exc, started, returncode=MISSING_EXECUTABLE_RETURNCODE)
        except OSError as exc:
            return self._launch_failure(exc, started, returncode=None)
        return classify(
            completed.returncode,
            completed.stdout,
            completed.stderr,
            success_codes=success_codes,
            patterns=self.patterns,
            duration=self.clock() - started,
        )

    def _launch_failure(self, exc: OSError, started: float, *, returncode: int | None) -> ExecutionOutcome:
        message = str(exc) or exc.__class__.__name__
        return ExecutionOutcome(
            kind=OutcomeKind.FAILURE,
            output=message,
            error=message,
            returncode=returncode,
            duration=self.clock() - started,
        )


__all__ = [
    "DEFAULT_FAILURE_MESSAGE",
    "MISSING_EXECUTABLE_RETURNCODE",
    "NO_AUTO_FIX_MESSAGE",
    "CheckExecutor",
    "RunnerCallable",
    "classify",
    "merge_output",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fix-then-reverify cycle controller driving the whole verification run."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Final

from ..checks.catalog import DEFAULT_CATALOG, CheckCatalog
from ..checks.models import (
    AppliedFix,
    CheckDefinition,
    CheckResult,
    OutcomeKind,
    PendingFix,
    ProgressLevel,
    RunResult,
    RunStatus,
)
from ..platforms.extension import PlatformExtension, PlatformRunResult
from .applicability import ExecutableProbe, resolve_applicable_checks
from .executor import CheckExecutor
from .options import VerifyOptions
from .progress import ProgressReporter

NO_CHECKS_MESSAGE: Final[str] = (
    "No applicable checks found. Add scripts to package.json: typecheck, lint, format, test, build"
)


class _CycleVerdict(str, Enum):
    PASSED = "passed"
    RESTART = "restart"
    BLOCKED = "blocked"
    FIX_FAILED = "fix_failed"
    DRY_RUN_FAILURES = "dry_run_failures"


@dataclass(slots=True)
class _CycleOutcome:
    verdict: _CycleVerdict
    results: list[CheckResult]


@dataclass(slots=True)
class CycleController:
    """Run the applicable checks until they all pass or the run must stop.

    Every successful fix restarts the cycle from the first check, because a fix
    for one check can break an earlier one. At most ``max_retries`` cycles run.
    """

    root: Path
    options: VerifyOptions
    catalog: CheckCatalog = DEFAULT_CATALOG
    executor: CheckExecutor = field(default_factory=CheckExecutor)
    platform_extension: PlatformExtension | None = None
    which: ExecutableProbe = shutil.which
    report: ProgressReporter = field(default_factory=ProgressReporter)
    _applied: list[AppliedFix] = field(default_factory=list, init=False)
    _pending: list[PendingFix] = field(default_factory=list, init=False)

    def run(self) -> RunResult:
        """Execute the verification state machine.

        Returns:
            RunResult: Terminal result; failures are reported, never raised.
        """

        # Fix ledgers belong to a single run.
        self._applied.clear()
        self._pending.clear()
        resolution = resolve_applicable_checks(self.root, self.catalog.standard, which=self.which)
        unavailable = list(resolution.unavailable)
        if unavailable:
            names = ", ".join(check.name for check in unavailable)
            self.report(f"Skipping checks (scripts not found): {names}", ProgressLevel.WARNING)
        if not resolution.applicable:
            self.report(NO_CHECKS_MESSAGE, ProgressLevel.WARNING)
            return RunResult(
                success=True,
                status=RunStatus.NO_CHECKS,
                total_attempts=0,
                pending_fixes=[] if self.options.dry_run else None,
                unavailable_checks=unavailable,
            )

        checks = resolution.applicable
        results: list[CheckResult] = []
        for cycle in range(1, self.options.max_retries + 1):
            self.report(f"Validation cycle {cycle}/{self.options.max_retries}", ProgressLevel.INFO)
            outcome = self._run_cycle(checks)
            results = outcome.results
            verdict = outcome.verdict
            if verdict is _CycleVerdict.RESTART:
                continue
            if verdict is _CycleVerdict.PASSED:
                return self._finish_passed(results, cycle, unavailable)
            if verdict is _CycleVerdict.DRY_RUN_FAILURES:
                self._report_dry_run_summary(results)
                return self._result(RunStatus.DRY_RUN_COMPLETE, results, cycle, unavailable, success=False)
            status = RunStatus.BLOCKED if verdict is _CycleVerdict.BLOCKED else RunStatus.FIX_FAILED
            if status is RunStatus.BLOCKED:
                self.report("Manual intervention required", ProgressLevel.ERROR)
            return self._result(status, results, cycle, unavailable, success=False)

        self.report(f"Maximum retries ({self.options.max_retries}) exceeded", ProgressLevel.ERROR)
        return self._result(
            RunStatus.MAX_RETRIES_EXCEEDED,
            results,
            self.options.max_retries,
            unavailable,
            success=False,
        )

    def _run_cycle(self, checks: tuple[CheckDefinition, ...]) -> _CycleOutcome:
        results: list[CheckResult] = []
        dry_run_failed = False
        total = len(checks)
        for index, check in enumerate(checks, start=1):
            self.report(f"Step {index}/{total}: {check.display_name}...", ProgressLevel.INFO)
            result = self.executor.run_check(check, self.root)
            if result.success:
                results.append(result)
                self._report_pass(result)
                continue

            self.report(f"{check.display_name} failed", ProgressLevel.ERROR)
            if self.options.dry_run:
                results.append(result)
                dry_run_failed = True
                self._record_pending(check, result)
                continue
            if not self.options.auto_fix or not check.can_auto_fix:
                results.append(result)
                self._report_manual(check, result)
                return _CycleOutcome(_CycleVerdict.BLOCKED, results)

            self.report(f"Attempting auto-fix for {check.display_name}...", ProgressLevel.INFO)
            fix = self.executor.apply_fix(check, self.root)
            if fix.kind is OutcomeKind.SKIPPED:
                skipped = result.as_skipped(fix.skip_reason)
                results.append(skipped)
                self._report_pass(skipped)
                continue
            if fix.kind is OutcomeKind.FAILURE:
                results.append(result)
                self.report(f"Auto-fix failed for {check.display_name}", ProgressLevel.ERROR)
                self.report.error_preview(fix.error or result.error)
                return _CycleOutcome(_CycleVerdict.FIX_FAILED, results)

            results.append(result)
            self._applied.append(AppliedFix.for_check(check))
            self.report(f"Auto-fix applied for {check.display_name}", ProgressLevel.SUCCESS)
            self.report("Fix applied - restarting all checks to verify...", ProgressLevel.INFO)
            return _CycleOutcome(_CycleVerdict.RESTART, results)

        verdict = _CycleVerdict.DRY_RUN_FAILURES if dry_run_failed else _CycleVerdict.PASSED
        return _CycleOutcome(verdict, results)

    def _finish_passed(self, results: list[CheckResult], cycle: int, unavailable: list[CheckDefinition]) -> RunResult:
        self.report(f"All checks passed in cycle {cycle}", ProgressLevel.SUCCESS)
        platform = self._run_platform_checks()
        if platform.success:
            return self._result(RunStatus.ALL_PASSED, results, cycle, unavailable, success=True, platform=platform)
        if self.options.dry_run:
            self._report_dry_run_summary([*results, *platform.results])
            status = RunStatus.DRY_RUN_COMPLETE
        else:
            status = RunStatus.PLATFORM_FAILED
        return self._result(status, results, cycle, unavailable, success=False, platform=platform)

    def _run_platform_checks(self) -> PlatformRunResult:
        if not self.options.include_platform_checks:
            return PlatformRunResult(success=True)
        extension = self.platform_extension or PlatformExtension(
            catalog=self.catalog,
            executor=self.executor,
            which=self.which,
        )
        outcome = extension.run(self.root, self.options, self.report)
        self._applied.extend(outcome.applied_fixes)
        self._pending.extend(outcome.pending_fixes)
        return outcome

    def _result(
        self,
        status: RunStatus,
        results: list[CheckResult],
        attempts: int,
        unavailable: list[CheckDefinition],
        *,
        success: bool,
        platform: PlatformRunResult | None = None,
    ) -> RunResult:
        return RunResult(
            success=success,
            status=status,
            results=results,
            total_attempts=attempts,
            fixes_applied=len(self._applied),
            applied_fixes=list(self._applied),
            pending_fixes=list(self._pending) if self.options.dry_run else None,
            unavailable_checks=unavailable,
            platform_results=list(platform.results) if platform is not None else [],
        )

    def _record_pending(self, check: CheckDefinition, result: CheckResult) -> None:
        if check.fix is not None:
            command = check.format_fix_command()
            self._pending.append(PendingFix(check=check, command=command))
            self.report(f"[DRY-RUN] Would run: {command}", ProgressLevel.INFO)
            return
        self.report(f"{check.display_name} requires manual fix", ProgressLevel.WARNING)
        self.report.error_preview(result.error)

    def _report_manual(self, check: CheckDefinition, result: CheckResult) -> None:
        if check.fix is not None:
            self.report(f"{check.display_name} can be fixed with: {check.format_fix_command()}", ProgressLevel.INFO)
        else:
            self.report(f"{check.display_name} requires manual fix", ProgressLevel.WARNING)
        self.report.error_preview(result.error)

    def _report_pass(self, result: CheckResult) -> None:
        if result.skipped:
            self.report(f"{result.check.display_name} skipped: {result.skip_reason}", ProgressLevel.WARNING)
        else:
            self.report(f"{result.check.display_name} passed ({result.duration:.2f}s)", ProgressLevel.SUCCESS)

    def _report_dry_run_summary(self, results: list[CheckResult]) -> None:
        failed = [result for result in results if not result.success]
        self.report(
            f"[DRY-RUN] {len(failed)} check(s) failing, {len(self._pending)} fixable automatically",
            ProgressLevel.WARNING,
        )


def run_all_checks(
    root: Path | str,
    options: VerifyOptions | None = None,
    *,
    catalog: CheckCatalog = DEFAULT_CATALOG,
    executor: CheckExecutor | None = None,
    platform_extension: PlatformExtension | None = None,
    which: ExecutableProbe = shutil.which,
) -> RunResult:
    """Verify the project at ``root``, applying fixes until every check passes.

    Args:
        root: Project directory containing ``package.json``.
        options: Run options; defaults to :class:`VerifyOptions`.
        catalog: Check catalog to draw standard and platform checks from.
        executor: Executor used for checks and fixes.
        platform_extension: Platform check runner; built from ``catalog`` when omitted.
        which: Executable presence probe.

    Returns:
        RunResult: Terminal result of the run.
    """

    resolved = options or VerifyOptions()
    controller = CycleController(
        root=Path(root),
        options=resolved,
        catalog=catalog,
        executor=executor or CheckExecutor(),
        platform_extension=platform_extension,
        which=which,
        report=ProgressReporter(
            callback=resolved.on_progress,
            preview_length=resolved.error_preview_length,
        ),
    )
    return controller.run()


__all__ = ["NO_CHECKS_MESSAGE", "CycleController", "run_all_checks"]

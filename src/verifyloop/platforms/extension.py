# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Platform-specific checks run once the standard catalog passes."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Final

from ..checks.catalog import DEFAULT_CATALOG, CheckCatalog, PlatformCLIInstall
from ..checks.models import (
    AppliedFix,
    CheckDefinition,
    CheckResult,
    Invocation,
    OutcomeKind,
    PendingFix,
    ProgressLevel,
)
from ..orchestration.applicability import ExecutableProbe
from ..orchestration.executor import CheckExecutor
from ..orchestration.options import VerifyOptions
from ..orchestration.progress import ProgressReporter
from .detection import PlatformDetectionResult, detect_platforms

PlatformDetector = Callable[[Path], PlatformDetectionResult]

_PREREQUISITE_DOCS: Final = MappingProxyType(
    {
        "npm": "https://nodejs.org/en/download",
        "composer": "https://getcomposer.org/download/",
    },
)


@dataclass(frozen=True, slots=True)
class PlatformRunResult:
    """Aggregate outcome of the platform checks for one project."""

    success: bool
    platform: str | None = None
    results: tuple[CheckResult, ...] = ()
    applied_fixes: tuple[AppliedFix, ...] = ()
    pending_fixes: tuple[PendingFix, ...] = ()


@dataclass(slots=True)
class _PlatformRun:
    results: list[CheckResult] = field(default_factory=list)
    applied: list[AppliedFix] = field(default_factory=list)
    pending: list[PendingFix] = field(default_factory=list)

    def finish(self, *, success: bool, platform: str) -> PlatformRunResult:
        return PlatformRunResult(
            success=success,
            platform=platform,
            results=tuple(self.results),
            applied_fixes=tuple(self.applied),
            pending_fixes=tuple(self.pending),
        )


def install_remediation(spec: PlatformCLIInstall) -> str:
    """Return the manual remediation text for a missing platform CLI.

    Args:
        spec: Install specification of the missing CLI.

    Returns:
        str: Instructions naming the prerequisite and the install command.
    """

    prerequisite = spec.prerequisite
    docs = _PREREQUISITE_DOCS.get(prerequisite)
    lines = [f"{spec.display_name} ({spec.cli}) is not installed."]
    if docs:
        lines.append(f"Install {prerequisite} ({docs}) and run: {spec.format_install()}")
    else:
        lines.append(f"Run: {spec.format_install()}")
    if spec.requires_composer:
        lines.append("Ensure the composer global bin directory is on PATH.")
    lines.append(f"Documentation: {spec.docs_url}")
    return "\n".join(lines)


@dataclass(slots=True)
class PlatformExtension:
    """Detect the project's platform and run its checks with a scoped fix loop.

    Unlike the standard catalog, a fixed platform check is re-run on its own;
    the rest of the catalog is not restarted.
    """

    catalog: CheckCatalog = DEFAULT_CATALOG
    executor: CheckExecutor = field(default_factory=CheckExecutor)
    detector: PlatformDetector = detect_platforms
    which: ExecutableProbe = shutil.which

    def run(self, root: Path, options: VerifyOptions, report: ProgressReporter) -> PlatformRunResult:
        """Run the platform checks applicable to ``root``.

        Args:
            root: Project directory.
            options: Options governing fixes, retries, and CLI provisioning.
            report: Progress sink.

        Returns:
            PlatformRunResult: Results, fixes, and the overall verdict. A project
            without a recognised platform is a trivial success.
        """

        platform = self.choose_platform(root, options, report)
        if platform is None:
            return PlatformRunResult(success=True)
        checks = self.catalog.platform_checks_for(platform)
        if not checks:
            return PlatformRunResult(success=True, platform=platform)

        report(f"Running {platform} platform checks", ProgressLevel.INFO)
        run = _PlatformRun()
        for check in checks:
            provisioned = self._ensure_cli(check, platform, root, options, report)
            if provisioned is not None:
                run.results.append(provisioned)
                if not provisioned.success:
                    return run.finish(success=False, platform=platform)
                continue
            result = self._run_scoped(check, root, options, report, run)
            run.results.append(result)
            if not result.success:
                return run.finish(success=False, platform=platform)
        return run.finish(success=True, platform=platform)

    def choose_platform(self, root: Path, options: VerifyOptions, report: ProgressReporter) -> str | None:
        """Return the platform whose checks should run, or ``None``.

        Args:
            root: Project directory.
            options: Options carrying an explicit platform or a selector.
            report: Progress sink.

        Returns:
            str | None: Chosen platform name.
        """

        if options.platform is not None:
            if self.catalog.install_for(options.platform) is None:
                report(f"Unknown platform '{options.platform}'; skipping platform checks", ProgressLevel.WARNING)
                return None
            return options.platform

        detected = self.detector(root).detected
        if not detected:
            return None
        if len(detected) == 1:
            report(f"Detected platform: {detected[0]}", ProgressLevel.INFO)
            return detected[0]

        listing = ", ".join(detected)
        choice = options.platform_selector(detected) if options.platform_selector is not None else None
        if choice is None or choice not in detected:
            report(
                f"Multiple platforms detected ({listing}); choose one with --platform. Skipping platform checks",
                ProgressLevel.WARNING,
            )
            return None
        report(f"Selected platform: {choice}", ProgressLevel.INFO)
        return choice

    def _ensure_cli(
        self,
        check: CheckDefinition,
        platform: str,
        root: Path,
        options: VerifyOptions,
        report: ProgressReporter,
    ) -> CheckResult | None:
        """Return ``None`` when the check's CLI is usable, else a terminal result."""

        if self.which(check.invocation.command) is not None:
            return None
        spec = self.catalog.install_for(platform)
        if spec is None:
            message = f"{check.invocation.command} is not installed and no install command is known"
            report(message, ProgressLevel.ERROR)
            return CheckResult(check=check, success=False, error=message, output=message)

        if options.dry_run:
            reason = f"{spec.cli} not installed; would run: {spec.format_install()}"
            report(f"[DRY-RUN] {check.display_name}: {reason}", ProgressLevel.WARNING)
            return CheckResult(check=check, success=True, skipped=True, skip_reason=reason)

        remediation = install_remediation(spec)
        if not options.install_platform_cli or self.which(spec.prerequisite) is None:
            report(f"{spec.display_name} is required for {check.display_name}", ProgressLevel.ERROR)
            report.error_preview(remediation)
            return CheckResult(check=check, success=False, error=remediation, output=remediation)

        report(f"Installing {spec.display_name}: {spec.format_install()}", ProgressLevel.INFO)
        outcome = self.executor.execute(Invocation.parse(spec.install), root)
        if outcome.kind is OutcomeKind.FAILURE:
            error = f"{outcome.error or outcome.output}\n\n{remediation}"
            report(f"Failed to install {spec.display_name}", ProgressLevel.ERROR)
            report.error_preview(error)
            return CheckResult(check=check, success=False, error=error, output=outcome.output)
        if self.which(check.invocation.command) is None:
            report(f"{spec.cli} is still not on PATH after installation", ProgressLevel.ERROR)
            report.error_preview(remediation)
            return CheckResult(check=check, success=False, error=remediation, output=outcome.output)
        report(f"Installed {spec.display_name}", ProgressLevel.SUCCESS)
        return None

    def _run_scoped(
        self,
        check: CheckDefinition,
        root: Path,
        options: VerifyOptions,
        report: ProgressReporter,
        run: _PlatformRun,
    ) -> CheckResult:
        attempt = 0
        while True:
            attempt += 1
            report(f"Platform check: {check.display_name}...", ProgressLevel.INFO)
            result = self.executor.run_check(check, root)
            if result.skipped:
                report(f"{check.display_name} skipped: {result.skip_reason}", ProgressLevel.WARNING)
                return result
            if result.success:
                report(f"{check.display_name} passed ({result.duration:.2f}s)", ProgressLevel.SUCCESS)
                return result

            report(f"{check.display_name} failed", ProgressLevel.ERROR)
            if options.dry_run:
                if check.fix is not None:
                    command = check.format_fix_command()
                    run.pending.append(PendingFix(check=check, command=command))
                    report(f"[DRY-RUN] Would run: {command}", ProgressLevel.INFO)
                else:
                    report(f"{check.display_name} requires manual fix", ProgressLevel.WARNING)
                return result
            if not options.auto_fix or not check.can_auto_fix:
                if check.fix is not None:
                    report(f"{check.display_name} can be fixed with: {check.format_fix_command()}", ProgressLevel.INFO)
                else:
                    report(f"{check.display_name} requires manual fix", ProgressLevel.WARNING)
                report.error_preview(result.error)
                return result
            if attempt >= options.max_retries:
                report(f"Maximum retries ({options.max_retries}) exceeded for {check.display_name}", ProgressLevel.ERROR)
                report.error_preview(result.error)
                return result

            report(f"Attempting auto-fix for {check.display_name}...", ProgressLevel.INFO)
            fix = self.executor.apply_fix(check, root)
            if fix.kind is OutcomeKind.SKIPPED:
                report(f"{check.display_name} skipped: {fix.skip_reason}", ProgressLevel.WARNING)
                return result.as_skipped(fix.skip_reason)
            if fix.kind is OutcomeKind.FAILURE:
                report(f"Auto-fix failed for {check.display_name}", ProgressLevel.ERROR)
                report.error_preview(fix.error or result.error)
                return result
            run.applied.append(AppliedFix.for_check(check))
            report(f"Auto-fix applied for {check.display_name}; re-checking", ProgressLevel.SUCCESS)


__all__ = [
    "PlatformDetector",
    "PlatformExtension",
    "PlatformRunResult",
    "install_remediation",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rendering helpers for the verify CLI command."""

from __future__ import annotations

from ....checks.models import RunResult, RunStatus
from ...shared import CLILogger
from .models import VerifyCLIOptions


def render_header(options: VerifyCLIOptions, *, logger: CLILogger) -> None:
    """Render the run banner and the effective options.

    Args:
        options: Normalised verify command options.
        logger: CLI logger responsible for user-facing messaging.
    """

    logger.section("Quality Verification")
    logger.plain(f"Project: {options.root}")
    if options.dry_run:
        logger.warn("DRY-RUN mode: checks run but no fixes are applied")
    else:
        logger.plain(f"Auto-fix: {'enabled' if options.auto_fix else 'disabled'}")
    logger.plain(f"Max retries: {options.max_retries}")
    logger.plain(f"Platform checks: {'enabled' if options.include_platform_checks else 'disabled'}")
    logger.debug(
        f"root={options.root} auto_fix={options.auto_fix} max_retries={options.max_retries} "
        f"dry_run={options.dry_run} platform={options.platform or '-'} commit={options.commit}",
    )


def render_summary(result: RunResult, *, elapsed: float, logger: CLILogger) -> None:
    """Render the summary block printed after a run.

    Args:
        result: Terminal result of the run.
        elapsed: Wall clock seconds spent in the run.
        logger: CLI logger responsible for user-facing messaging.
    """

    logger.section("Summary")
    logger.plain(f"Total time: {elapsed:.2f}s")
    logger.plain(f"Validation cycles: {result.total_attempts}")
    logger.plain(f"Fixes applied: {result.fixes_applied}")
    for fix in result.applied_fixes:
        logger.plain(f"  - {fix.display_name}: {fix.command}", style="dim")
    if result.pending_fixes is not None:
        logger.plain(f"Pending fixes: {len(result.pending_fixes)}")
        for pending in result.pending_fixes:
            logger.plain(f"  - {pending.check.display_name}: {pending.command}", style="dim")
    if result.unavailable_checks:
        names = ", ".join(check.name for check in result.unavailable_checks)
        logger.plain(f"Unavailable checks: {names}")
    for platform_result in result.platform_results:
        label = "skipped" if platform_result.skipped else ("passed" if platform_result.success else "failed")
        logger.plain(f"Platform check {platform_result.check.display_name}: {label}")

    if result.success:
        logger.ok("All quality checks passed")
    else:
        logger.fail(f"Verification failed ({result.status.value})")
    render_next_steps(result, logger=logger)


def render_next_steps(result: RunResult, *, logger: CLILogger) -> None:
    """Render follow-up advice matching the terminal status."""

    steps: list[str] = []
    if result.status is RunStatus.NO_CHECKS:
        steps.append("Add typecheck, lint, format, test, or build scripts to package.json")
    elif result.status is RunStatus.DRY_RUN_COMPLETE:
        if result.pending_fixes:
            steps.append("Re-run with --fix (without --dry-run) to apply the pending fixes")
        steps.append("Fix the remaining failures manually")
    elif result.status is RunStatus.BLOCKED:
        steps.append("Fix the reported failures manually, or re-run with --fix when a fix is available")
    elif result.status is RunStatus.FIX_FAILED:
        steps.append("Run the failing fix command by hand and inspect its output")
    elif result.status is RunStatus.MAX_RETRIES_EXCEEDED:
        steps.append("Fixes keep reintroducing failures; inspect the applied fixes or raise --max-retries")
    elif result.status is RunStatus.PLATFORM_FAILED:
        steps.append("Resolve the platform check failures or re-run with --no-platform-checks")
    elif result.fixes_applied:
        steps.append("Review and commit the applied fixes (or re-run with --commit)")
    if not steps:
        return
    logger.section("Next steps")
    for step in steps:
        logger.plain(f"- {step}")


__all__ = ["render_header", "render_next_steps", "render_summary"]

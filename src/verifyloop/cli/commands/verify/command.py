# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI entry point running the fix-then-reverify loop."""

from __future__ import annotations

import sys
import time
from collections.abc import Sequence
from pathlib import Path

import click
import typer

from ....checks.models import ProgressCallback, ProgressLevel
from ....config import ConfigError, build_catalog, load_config
from ....git import commit_changes, has_uncommitted_changes, stage_all_changes
from ....orchestration.controller import run_all_checks
from ....orchestration.options import PlatformSelector, VerifyOptions
from ...shared import CLIError, CLILogger, build_cli_logger
from .models import (
    COMMIT_OPTION,
    DEBUG_OPTION,
    DRY_RUN_OPTION,
    EMOJI_OPTION,
    FIX_OPTION,
    MAX_RETRIES_OPTION,
    PLATFORM_CHECKS_OPTION,
    PLATFORM_OPTION,
    ROOT_OPTION,
    VerifyCLIOptions,
    build_verify_options,
)
from .rendering import render_header, render_summary


def verify_command(
    root: ROOT_OPTION = Path("."),
    fix: FIX_OPTION = None,
    max_retries: MAX_RETRIES_OPTION = None,
    commit: COMMIT_OPTION = False,
    dry_run: DRY_RUN_OPTION = False,
    platform_checks: PLATFORM_CHECKS_OPTION = None,
    platform: PLATFORM_OPTION = None,
    emoji: EMOJI_OPTION = None,
    debug: DEBUG_OPTION = False,
) -> None:
    """Run every applicable quality check, fixing and re-verifying until clean."""

    resolved_root = root.resolve()
    try:
        config = load_config(resolved_root)
        catalog = build_catalog(config)
    except ConfigError as exc:
        build_cli_logger(emoji=emoji is not False).fail(str(exc))
        raise typer.Exit(code=1) from exc

    options = build_verify_options(
        config,
        root=resolved_root,
        fix=fix,
        max_retries=max_retries,
        commit=commit,
        dry_run=dry_run,
        platform_checks=platform_checks,
        platform=platform,
        emoji=emoji,
        debug=debug,
    )
    logger = build_cli_logger(emoji=options.use_emoji, debug=options.debug)
    render_header(options, logger=logger)

    verify_options = VerifyOptions(
        max_retries=options.max_retries,
        auto_fix=options.auto_fix,
        dry_run=options.dry_run,
        include_platform_checks=options.include_platform_checks,
        install_platform_cli=config.install_platform_cli,
        error_preview_length=config.error_preview_length,
        platform=options.platform,
        on_progress=_progress_sink(logger),
        platform_selector=_interactive_selector() if sys.stdin.isatty() else None,
    )
    started = time.perf_counter()
    result = run_all_checks(resolved_root, verify_options, catalog=catalog)
    render_summary(result, elapsed=time.perf_counter() - started, logger=logger)

    if not result.success:
        raise typer.Exit(code=1)
    if options.commit:
        try:
            _commit_fixes(options, logger=logger)
        except CLIError as exc:
            logger.fail(str(exc))
            raise typer.Exit(code=exc.exit_code) from exc
    raise typer.Exit(code=0)


def _progress_sink(logger: CLILogger) -> ProgressCallback:
    def emit(message: str, level: ProgressLevel) -> None:
        if level is ProgressLevel.SUCCESS:
            logger.ok(message)
        elif level is ProgressLevel.WARNING:
            logger.warn(message)
        elif level is ProgressLevel.ERROR:
            logger.fail(message)
        else:
            logger.info(message)

    return emit


def _interactive_selector() -> PlatformSelector:
    def select(platforms: Sequence[str]) -> str | None:
        choices = [*platforms, "skip"]
        answer = typer.prompt(
            "Multiple platforms detected; which checks should run?",
            type=click.Choice(choices),
            default=platforms[0],
        )
        return None if answer == "skip" else answer

    return select


def _commit_fixes(options: VerifyCLIOptions, *, logger: CLILogger) -> None:
    """Stage and commit the working tree after a successful run.

    Raises:
        CLIError: If staging or committing fails.
    """

    if not has_uncommitted_changes(options.root):
        logger.info("Working tree is clean; nothing to commit")
        return
    if not stage_all_changes(options.root):
        raise CLIError("Failed to stage changes")
    if not commit_changes(options.root):
        raise CLIError("Failed to commit changes")
    logger.ok("Committed auto-fixes")


__all__ = ["verify_command"]

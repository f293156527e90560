# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Data structures for the verify CLI command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from ....config import VerifyConfig

ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", exists=True, file_okay=False, help="Project root containing package.json."),
]
FIX_OPTION = Annotated[
    bool | None,
    typer.Option("--fix/--no-fix", help="Apply auto-fixes for failing checks that support them."),
]
MAX_RETRIES_OPTION = Annotated[
    int | None,
    typer.Option("--max-retries", min=1, help="Maximum number of validation cycles."),
]
COMMIT_OPTION = Annotated[
    bool,
    typer.Option("--commit", help="Commit applied fixes once every check passes."),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", help="Report failures and pending fixes without applying anything."),
]
PLATFORM_CHECKS_OPTION = Annotated[
    bool | None,
    typer.Option(
        "--platform-checks/--no-platform-checks",
        help="Run platform-specific checks once the standard checks pass.",
    ),
]
PLATFORM_OPTION = Annotated[
    str | None,
    typer.Option("--platform", help="Platform whose checks should run when several are detected."),
]
EMOJI_OPTION = Annotated[
    bool | None,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji in CLI output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Emit debug logging."),
]


@dataclass(slots=True)
class VerifyCLIOptions:
    """Normalised CLI inputs for the verify command, with config defaults applied."""

    root: Path
    auto_fix: bool
    max_retries: int
    commit: bool
    dry_run: bool
    include_platform_checks: bool
    platform: str | None
    use_emoji: bool
    debug: bool


def build_verify_options(
    config: VerifyConfig,
    *,
    root: Path,
    fix: bool | None,
    max_retries: int | None,
    commit: bool,
    dry_run: bool,
    platform_checks: bool | None,
    platform: str | None,
    emoji: bool | None,
    debug: bool,
) -> VerifyCLIOptions:
    """Merge explicit CLI flags over the project configuration.

    Flags left unset on the command line (``None``) fall back to ``config``.

    Args:
        config: Configuration loaded for the project.
        root: Project root supplied via CLI options.
        fix: Explicit ``--fix/--no-fix`` choice.
        max_retries: Explicit cycle budget.
        commit: Whether fixes should be committed after success.
        dry_run: Whether the run only reports.
        platform_checks: Explicit ``--platform-checks/--no-platform-checks`` choice.
        platform: Explicit platform name.
        emoji: Explicit ``--emoji/--no-emoji`` choice.
        debug: Whether debug logging is enabled.

    Returns:
        VerifyCLIOptions: Normalised verify command options.
    """

    return VerifyCLIOptions(
        root=root.resolve(),
        auto_fix=config.auto_fix if fix is None else fix,
        max_retries=config.max_retries if max_retries is None else max_retries,
        commit=commit,
        dry_run=dry_run,
        include_platform_checks=config.include_platform_checks if platform_checks is None else platform_checks,
        platform=platform,
        use_emoji=config.emoji if emoji is None else emoji,
        debug=debug,
    )


__all__ = [
    "COMMIT_OPTION",
    "DEBUG_OPTION",
    "DRY_RUN_OPTION",
    "EMOJI_OPTION",
    "FIX_OPTION",
    "MAX_RETRIES_OPTION",
    "PLATFORM_CHECKS_OPTION",
    "PLATFORM_OPTION",
    "ROOT_OPTION",
    "VerifyCLIOptions",
    "build_verify_options",
]

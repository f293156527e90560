# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Check catalog, skip patterns, and the data model shared by the orchestrator."""

from __future__ import annotations

from .catalog import (
    DEFAULT_CATALOG,
    PLATFORM_CHECKS,
    PLATFORM_CLI_INSTALL,
    QUALITY_CHECKS,
    CheckCatalog,
    PackageManager,
    PlatformCLIInstall,
    PlatformType,
)
from .models import (
    AppliedFix,
    CheckDefinition,
    CheckResult,
    ExecutionOutcome,
    Invocation,
    OutcomeKind,
    PendingFix,
    ProgressCallback,
    ProgressLevel,
    RunResult,
    RunStatus,
)
from .skips import SKIPPABLE_ERROR_PATTERNS, match_skippable

__all__ = [
    "DEFAULT_CATALOG",
    "PLATFORM_CHECKS",
    "PLATFORM_CLI_INSTALL",
    "QUALITY_CHECKS",
    "SKIPPABLE_ERROR_PATTERNS",
    "AppliedFix",
    "CheckCatalog",
    "CheckDefinition",
    "CheckResult",
    "ExecutionOutcome",
    "Invocation",
    "OutcomeKind",
    "PackageManager",
    "PendingFix",
    "PlatformCLIInstall",
    "PlatformType",
    "ProgressCallback",
    "ProgressLevel",
    "RunResult",
    "RunStatus",
    "match_skippable",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Quality check orchestration with automatic fixes and re-verification."""

from __future__ import annotations

from importlib import metadata

from .checks.catalog import DEFAULT_CATALOG, CheckCatalog
from .checks.models import CheckDefinition, CheckResult, ProgressLevel, RunResult, RunStatus
from .orchestration.controller import run_all_checks
from .orchestration.options import VerifyOptions

__all__ = [
    "DEFAULT_CATALOG",
    "CheckCatalog",
    "CheckDefinition",
    "CheckResult",
    "ProgressLevel",
    "RunResult",
    "RunStatus",
    "VerifyOptions",
    "__version__",
    "run_all_checks",
]

try:
    __version__ = metadata.version("verifyloop")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Applicability resolution, check execution, and the fix/re-verify cycle.

The cycle controller lives in :mod:`verifyloop.orchestration.controller` and is
not imported here because it depends on :mod:`verifyloop.platforms`, which in
turn reads manifests through this package.
"""

from __future__ import annotations

from .applicability import ApplicabilityResult, read_manifest_scripts, resolve_applicable_checks
from .executor import CheckExecutor, classify
from .options import VerifyOptions
from .progress import ProgressReporter

__all__ = [
    "ApplicabilityResult",
    "CheckExecutor",
    "ProgressReporter",
    "VerifyOptions",
    "classify",
    "read_manifest_scripts",
    "resolve_applicable_checks",
]

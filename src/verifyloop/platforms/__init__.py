# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Platform detection and platform-scoped quality checks."""

from __future__ import annotations

from .detection import UNKNOWN_PLATFORM, PlatformDetectionResult, detect_platforms
from .extension import PlatformExtension, PlatformRunResult, install_remediation

__all__ = [
    "UNKNOWN_PLATFORM",
    "PlatformDetectionResult",
    "PlatformExtension",
    "PlatformRunResult",
    "detect_platforms",
    "install_remediation",
]

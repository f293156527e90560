# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Options accepted by the verification entry point."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from ..checks.models import ProgressCallback

DEFAULT_MAX_RETRIES: Final[int] = 10
DEFAULT_ERROR_PREVIEW_LENGTH: Final[int] = 500

PlatformSelector = Callable[[Sequence[str]], str | None]


class VerifyOptions(BaseModel):
    """Caller-supplied knobs for a single verification run.

    ``platform_selector`` is consulted only when more than one platform is
    detected and ``platform`` does not already name one.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=1)
    auto_fix: bool = True
    dry_run: bool = False
    include_platform_checks: bool = True
    install_platform_cli: bool = True
    error_preview_length: int = Field(default=DEFAULT_ERROR_PREVIEW_LENGTH, ge=1)
    platform: str | None = None
    on_progress: ProgressCallback | None = None
    platform_selector: PlatformSelector | None = None


__all__ = [
    "DEFAULT_ERROR_PREVIEW_LENGTH",
    "DEFAULT_MAX_RETRIES",
    "PlatformSelector",
    "VerifyOptions",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Progress notifications emitted while checks run."""

from __future__ import annotations

from dataclasses import dataclass

from ..checks.models import ProgressCallback, ProgressLevel
from ..core.logging import fail, info, ok, warn


def truncate_preview(text: str, limit: int) -> tuple[str, int]:
    """Return ``text`` cut to ``limit`` characters and the number of dropped characters."""

    if len(text) <= limit:
        return text, 0
    return text[:limit], len(text) - limit


@dataclass(slots=True)
class ProgressReporter:
    """Route progress messages to a callback or the console helpers.

    Without a callback, messages are printed through :mod:`verifyloop.core.logging`
    using the helper that matches their level.
    """

    callback: ProgressCallback | None = None
    use_emoji: bool = True
    preview_length: int = 500

    def __call__(self, message: str, level: ProgressLevel = ProgressLevel.INFO) -> None:
        """Emit ``message`` at ``level``.

        Args:
            message: Text describing the orchestration step.
            level: Severity attached to the message.
        """

        if self.callback is not None:
            self.callback(message, level)
            return
        if level is ProgressLevel.SUCCESS:
            ok(message, use_emoji=self.use_emoji)
        elif level is ProgressLevel.WARNING:
            warn(message, use_emoji=self.use_emoji)
        elif level is ProgressLevel.ERROR:
            fail(message, use_emoji=self.use_emoji)
        else:
            info(message, use_emoji=self.use_emoji)

    def error_preview(self, error: str | None) -> None:
        """Emit a bounded preview of ``error`` output."""

        if not error:
            return
        preview, remaining = truncate_preview(error, self.preview_length)
        self(preview, ProgressLevel.ERROR)
        if remaining:
            self(f"... ({remaining} more characters)", ProgressLevel.ERROR)


__all__ = ["ProgressReporter", "truncate_preview"]

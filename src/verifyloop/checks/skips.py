# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Output patterns that turn a non-zero exit into a "nothing to check" skip."""

from __future__ import annotations

import re
from dataclasses import dataclass
from re import Pattern
from typing import Final


@dataclass(frozen=True, slots=True)
class SkippablePattern:
    """Regex paired with the human readable reason recorded on a match."""

    pattern: Pattern[str]
    reason: str

    @classmethod
    def compile(cls, expression: str, reason: str) -> SkippablePattern:
        """Compile ``expression`` case-insensitively."""

        return cls(pattern=re.compile(expression, re.IGNORECASE), reason=reason)


# Evaluated in order; the first match wins.
SKIPPABLE_ERROR_PATTERNS: Final[tuple[SkippablePattern, ...]] = (
    SkippablePattern.compile(
        r"No files matching the pattern .+ were found",
        "No files found to lint (ESLint)",
    ),
    SkippablePattern.compile(
        r"No inputs were found in config file",
        "No input files found (TypeScript)",
    ),
    SkippablePattern.compile(
        r"No parser could be inferred for file",
        "No supported files found to format (Prettier)",
    ),
    SkippablePattern.compile(
        r"No matching files\. Patterns:",
        "No files found to format (Prettier)",
    ),
    SkippablePattern.compile(
        r"No test files found",
        "No test files found (Vitest)",
    ),
    SkippablePattern.compile(
        r"No tests found, exiting with code 1",
        "No tests found (Jest)",
    ),
)


def match_skippable(
    output: str,
    patterns: tuple[SkippablePattern, ...] = SKIPPABLE_ERROR_PATTERNS,
) -> str | None:
    """Return the skip reason for ``output`` or ``None`` when nothing matches.

    Args:
        output: Combined stdout and stderr captured from a check.
        patterns: Ordered patterns to evaluate.

    Returns:
        str | None: Reason attached to the first matching pattern.
    """

    if not output:
        return None
    for entry in patterns:
        if entry.pattern.search(output):
            return entry.reason
    return None


__all__ = ["SKIPPABLE_ERROR_PATTERNS", "SkippablePattern", "match_skippable"]

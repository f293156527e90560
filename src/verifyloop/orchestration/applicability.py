# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide which catalog checks apply to a project."""

from __future__ import annotations

import json
import shutil
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..checks.models import CheckDefinition

MANIFEST_FILENAME: Final[str] = "package.json"

ExecutableProbe = Callable[[str], str | None]


@dataclass(frozen=True, slots=True)
class ApplicabilityResult:
    """Checks that will run and checks omitted for lack of an invocation."""

    applicable: tuple[CheckDefinition, ...]
    unavailable: tuple[CheckDefinition, ...]


def read_manifest(root: Path) -> Mapping[str, object]:
    """Return the parsed ``package.json`` at ``root`` or an empty mapping.

    Args:
        root: Project directory containing the manifest.

    Returns:
        Mapping[str, object]: Manifest payload; empty when the file is missing,
        unreadable, or not a JSON object.
    """

    manifest_path = root / MANIFEST_FILENAME
    try:
        payload = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return {}
    if not isinstance(payload, dict):
        return {}
    return payload


def read_manifest_scripts(root: Path) -> frozenset[str]:
    """Return the script names declared in the project manifest."""

    scripts = read_manifest(root).get("scripts")
    if not isinstance(scripts, dict):
        return frozenset()
    return frozenset(str(name) for name in scripts)


def resolve_applicable_checks(
    root: Path,
    checks: Iterable[CheckDefinition],
    *,
    which: ExecutableProbe = shutil.which,
) -> ApplicabilityResult:
    """Return the ordered subset of ``checks`` that can run in ``root``.

    A check without a required script always applies. A check whose script is
    declared in the manifest keeps its primary invocation. Otherwise the
    fallback invocation is substituted when its executable resolves on the
    search path; failing that, the check is reported as unavailable.

    Args:
        root: Project directory to inspect.
        checks: Catalog entries in execution order.
        which: Executable presence probe.

    Returns:
        ApplicabilityResult: Applicable checks in catalog order plus the omitted ones.
    """

    scripts = read_manifest_scripts(root)
    applicable: list[CheckDefinition] = []
    unavailable: list[CheckDefinition] = []
    for check in checks:
        if check.required_script is None or check.required_script in scripts:
            applicable.append(check)
            continue
        if check.fallback is not None and which(check.fallback.command) is not None:
            applicable.append(check.with_invocation(check.fallback))
            continue
        unavailable.append(check)
    return ApplicabilityResult(applicable=tuple(applicable), unavailable=tuple(unavailable))


__all__ = [
    "MANIFEST_FILENAME",
    "ApplicabilityResult",
    "ExecutableProbe",
    "read_manifest",
    "read_manifest_scripts",
    "resolve_applicable_checks",
]

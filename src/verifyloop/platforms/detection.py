# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detect site-builder platforms that carry their own quality checks."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..checks.catalog import PlatformType
from ..orchestration.applicability import read_manifest

UNKNOWN_PLATFORM: Final[str] = "unknown"
COMPOSER_FILENAME: Final[str] = "composer.json"

_THEME_HEADER: Final[re.Pattern[str]] = re.compile(r"^\s*Theme Name\s*:", re.MULTILINE)
_HYDROGEN_PACKAGES: Final[frozenset[str]] = frozenset({"@shopify/hydrogen", "@shopify/remix-oxygen"})
_THEME_PACKAGES: Final[frozenset[str]] = frozenset({"@shopify/theme"})
_HYDROGEN_CONFIGS: Final[tuple[str, ...]] = ("hydrogen.config.ts", "hydrogen.config.js")


@dataclass(frozen=True, slots=True)
class PlatformDetectionResult:
    """Platforms detected in a project, most specific first."""

    detected: tuple[PlatformType, ...]

    @property
    def primary(self) -> str:
        """Return the first detected platform or ``"unknown"``."""

        return self.detected[0] if self.detected else UNKNOWN_PLATFORM


@dataclass(frozen=True, slots=True)
class _ProjectFacts:
    root: Path
    node_dependencies: frozenset[str]
    composer_requirements: frozenset[str]

    def exists(self, relative: str) -> bool:
        return (self.root / relative).exists()

    def is_dir(self, relative: str) -> bool:
        return (self.root / relative).is_dir()


def _dependency_names(manifest: Mapping[str, object], *sections: str) -> frozenset[str]:
    names: set[str] = set()
    for section in sections:
        entries = manifest.get(section)
        if isinstance(entries, dict):
            names.update(str(name) for name in entries)
    return frozenset(names)


def _read_composer(root: Path) -> Mapping[str, object]:
    try:
        payload = json.loads((root / COMPOSER_FILENAME).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return {}
    return payload if isinstance(payload, dict) else {}


def _has_liquid_templates(root: Path) -> bool:
    try:
        return any(path.is_file() for path in root.glob("*.liquid"))
    except OSError:
        return False


def _has_wordpress_theme_header(root: Path) -> bool:
    try:
        text = (root / "style.css").read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return False
    return bool(_THEME_HEADER.search(text))


def _is_hydrogen(facts: _ProjectFacts) -> bool:
    if facts.node_dependencies & _HYDROGEN_PACKAGES:
        return True
    return any(facts.exists(name) for name in _HYDROGEN_CONFIGS)


def _is_shopify_theme(facts: _ProjectFacts) -> bool:
    if facts.exists("shopify.theme.toml") or facts.exists("config/settings_schema.json"):
        return True
    if facts.node_dependencies & _THEME_PACKAGES:
        return True
    return _has_liquid_templates(facts.root)


def _is_woocommerce(facts: _ProjectFacts) -> bool:
    if facts.is_dir("wp-content/plugins/woocommerce"):
        return True
    return "woocommerce/woocommerce" in facts.composer_requirements


def _is_wordpress(facts: _ProjectFacts) -> bool:
    if facts.is_dir("wp-content") or facts.exists("functions.php"):
        return True
    if _has_wordpress_theme_header(facts.root):
        return True
    return any("wordpress" in requirement for requirement in facts.composer_requirements)


def _is_magento(facts: _ProjectFacts) -> bool:
    if facts.exists("app/etc/env.php") or facts.exists("bin/magento"):
        return True
    return any(requirement.startswith("magento/") for requirement in facts.composer_requirements)


def detect_platforms(root: Path) -> PlatformDetectionResult:
    """Return the platforms detected in ``root``.

    Hydrogen is reported ahead of a plain Shopify theme, and WooCommerce
    replaces plain WordPress because it implies it. Unreadable or malformed
    manifests are treated as empty.

    Args:
        root: Project directory to inspect.

    Returns:
        PlatformDetectionResult: Detected platforms ordered most specific first.
    """

    if not root.is_dir():
        return PlatformDetectionResult(detected=())
    composer = _read_composer(root)
    facts = _ProjectFacts(
        root=root,
        node_dependencies=_dependency_names(read_manifest(root), "dependencies", "devDependencies"),
        composer_requirements=_dependency_names(composer, "require", "require-dev"),
    )
    detected: list[PlatformType] = []
    if _is_hydrogen(facts):
        detected.append("shopify-hydrogen")
    if _is_shopify_theme(facts):
        detected.append("shopify-theme")
    if _is_woocommerce(facts):
        detected.append("woocommerce")
    elif _is_wordpress(facts):
        detected.append("wordpress")
    if _is_magento(facts):
        detected.append("magento")
    return PlatformDetectionResult(detected=tuple(detected))


__all__ = ["UNKNOWN_PLATFORM", "PlatformDetectionResult", "detect_platforms"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered configuration for verification runs.

Sources are merged in order, later ones winning: built-in defaults, the
``[tool.verifyloop]`` table of ``pyproject.toml``, then ``.verifyloop.toml`` at
the project root. Command line flags are applied on top by the CLI.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .checks.catalog import DEFAULT_CATALOG, DEFAULT_PACKAGE_MANAGER, CheckCatalog, PackageManager

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PROJECT_CONFIG_FILENAME: Final[str] = ".verifyloop.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "verifyloop"


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class VerifyConfig(BaseModel):
    """Project-level defaults for the ``verify`` command."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_retries: int = Field(default=10, ge=1)
    auto_fix: bool = False
    include_platform_checks: bool = True
    install_platform_cli: bool = True
    error_preview_length: int = Field(default=500, ge=1)
    package_manager: PackageManager = DEFAULT_PACKAGE_MANAGER
    disabled_checks: tuple[str, ...] = ()
    emoji: bool = True


@dataclass(frozen=True, slots=True)
class ConfigFragment:
    """Raw settings loaded from one source."""

    source: str
    values: Mapping[str, Any]


def _normalise_keys(values: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in values.items()}


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc


def load_pyproject_fragment(root: Path) -> ConfigFragment | None:
    """Return the ``[tool.verifyloop]`` table from ``root/pyproject.toml``.

    Args:
        root: Project directory.

    Returns:
        ConfigFragment | None: Fragment, or ``None`` when absent.

    Raises:
        ConfigError: If the file cannot be parsed or the section is not a table.
    """

    path = root / PYPROJECT_FILENAME
    if not path.is_file():
        return None
    document = _read_toml(path)
    tool = document.get(PYPROJECT_TOOL_KEY)
    section = tool.get(PYPROJECT_SECTION_KEY) if isinstance(tool, Mapping) else None
    if section is None:
        return None
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.verifyloop] in {path} must be a table")
    return ConfigFragment(source=f"{path} [tool.verifyloop]", values=_normalise_keys(section))


def load_project_fragment(root: Path) -> ConfigFragment | None:
    """Return settings from ``root/.verifyloop.toml`` when present."""

    path = root / PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    return ConfigFragment(source=str(path), values=_normalise_keys(_read_toml(path)))


def merge_fragments(fragments: list[ConfigFragment], base: VerifyConfig | None = None) -> VerifyConfig:
    """Apply ``fragments`` in order on top of ``base``.

    Args:
        fragments: Fragments ordered from lowest to highest precedence.
        base: Starting configuration; built-in defaults when omitted.

    Returns:
        VerifyConfig: Validated merged configuration.

    Raises:
        ConfigError: If a fragment contains unknown keys or invalid values.
    """

    config = base or VerifyConfig()
    for fragment in fragments:
        merged = {**config.model_dump(), **fragment.values}
        try:
            config = VerifyConfig.model_validate(merged)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
                for error in exc.errors()
            )
            raise ConfigError(f"Invalid configuration in {fragment.source}: {problems}") from exc
    return config


def load_config(root: Path) -> VerifyConfig:
    """Load the layered configuration for the project at ``root``."""

    fragments = [
        fragment
        for fragment in (load_pyproject_fragment(root), load_project_fragment(root))
        if fragment is not None
    ]
    return merge_fragments(fragments)


def build_catalog(config: VerifyConfig, base: CheckCatalog = DEFAULT_CATALOG) -> CheckCatalog:
    """Return ``base`` adjusted for the configured package manager and disabled checks.

    Raises:
        ConfigError: If ``disabled_checks`` names a check the catalog does not know.
    """

    known = {check.name for check in base.standard}
    unknown = sorted(set(config.disabled_checks) - known)
    if unknown:
        raise ConfigError(f"Unknown checks in disabled_checks: {', '.join(unknown)}")
    return base.with_package_manager(config.package_manager).without(config.disabled_checks)


__all__ = [
    "PROJECT_CONFIG_FILENAME",
    "PYPROJECT_FILENAME",
    "ConfigError",
    "ConfigFragment",
    "VerifyConfig",
    "build_catalog",
    "load_config",
    "load_project_fragment",
    "load_pyproject_fragment",
    "merge_fragments",
]

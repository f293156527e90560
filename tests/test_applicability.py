# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for manifest-driven check applicability."""

from __future__ import annotations

from pathlib import Path

from tests.helpers.runners import Executables, no_executables
from verifyloop.checks.catalog import QUALITY_CHECKS
from verifyloop.orchestration.applicability import read_manifest_scripts, resolve_applicable_checks


def test_all_scripts_declared_keeps_catalog_order(write_manifest) -> None:
    root = write_manifest(["build", "test", "format", "lint", "typecheck"])

    resolution = resolve_applicable_checks(root, QUALITY_CHECKS, which=no_executables)

    assert [check.name for check in resolution.applicable] == ["typecheck", "lint", "format", "test", "build"]
    assert resolution.unavailable == ()


def test_missing_manifest_yields_no_scripts(tmp_path: Path) -> None:
    assert read_manifest_scripts(tmp_path) == frozenset()

    resolution = resolve_applicable_checks(tmp_path, QUALITY_CHECKS, which=no_executables)

    assert resolution.applicable == ()
    assert [check.name for check in resolution.unavailable] == ["typecheck", "lint", "format", "test", "build"]


def test_invalid_json_is_treated_as_empty(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("{not json", encoding="utf-8")

    assert read_manifest_scripts(tmp_path) == frozenset()


def test_non_object_scripts_are_ignored(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text('{"scripts": ["lint"]}', encoding="utf-8")

    assert read_manifest_scripts(tmp_path) == frozenset()


def test_fallback_replaces_missing_typecheck_script(write_manifest) -> None:
    root = write_manifest(["lint"])

    resolution = resolve_applicable_checks(root, QUALITY_CHECKS, which=Executables("tsc"))

    assert [check.name for check in resolution.applicable] == ["typecheck", "lint"]
    assert resolution.applicable[0].invocation.format() == "tsc --noEmit"
    assert [check.name for check in resolution.unavailable] == ["format", "test", "build"]


def test_fallback_requires_installed_executable(write_manifest) -> None:
    root = write_manifest(["lint"])

    resolution = resolve_applicable_checks(root, QUALITY_CHECKS, which=no_executables)

    assert [check.name for check in resolution.applicable] == ["lint"]
    assert resolution.unavailable[0].name == "typecheck"

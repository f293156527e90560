# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for platform detection heuristics."""

from __future__ import annotations

import json
from pathlib import Path

from verifyloop.platforms.detection import UNKNOWN_PLATFORM, detect_platforms


def _write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_plain_project_has_no_platform(tmp_path: Path) -> None:
    _write_json(tmp_path / "package.json", {"dependencies": {"react": "^18"}})

    result = detect_platforms(tmp_path)

    assert result.detected == ()
    assert result.primary == UNKNOWN_PLATFORM


def test_missing_directory_is_tolerated(tmp_path: Path) -> None:
    assert detect_platforms(tmp_path / "missing").detected == ()


def test_hydrogen_dependency(tmp_path: Path) -> None:
    _write_json(tmp_path / "package.json", {"dependencies": {"@shopify/hydrogen": "2024.1.0"}})

    assert detect_platforms(tmp_path).detected == ("shopify-hydrogen",)


def test_hydrogen_config_file(tmp_path: Path) -> None:
    (tmp_path / "hydrogen.config.ts").write_text("export default {}", encoding="utf-8")

    assert detect_platforms(tmp_path).primary == "shopify-hydrogen"


def test_shopify_theme_markers(tmp_path: Path) -> None:
    (tmp_path / "shopify.theme.toml").write_text("", encoding="utf-8")

    assert detect_platforms(tmp_path).detected == ("shopify-theme",)


def test_liquid_templates_mark_a_theme(tmp_path: Path) -> None:
    (tmp_path / "theme.liquid").write_text("{{ content_for_layout }}", encoding="utf-8")

    assert detect_platforms(tmp_path).detected == ("shopify-theme",)


def test_hydrogen_is_reported_before_theme(tmp_path: Path) -> None:
    _write_json(tmp_path / "package.json", {"devDependencies": {"@shopify/remix-oxygen": "1.0.0"}})
    _write_json(tmp_path / "config" / "settings_schema.json", [])

    assert detect_platforms(tmp_path).detected == ("shopify-hydrogen", "shopify-theme")


def test_wordpress_theme_header(tmp_path: Path) -> None:
    (tmp_path / "style.css").write_text("/*\nTheme Name: Twenty Fixture\n*/\n", encoding="utf-8")

    assert detect_platforms(tmp_path).detected == ("wordpress",)


def test_wordpress_content_directory(tmp_path: Path) -> None:
    (tmp_path / "wp-content").mkdir()

    assert detect_platforms(tmp_path).detected == ("wordpress",)


def test_woocommerce_replaces_wordpress(tmp_path: Path) -> None:
    (tmp_path / "wp-content" / "plugins" / "woocommerce").mkdir(parents=True)

    assert detect_platforms(tmp_path).detected == ("woocommerce",)


def test_woocommerce_composer_requirement(tmp_path: Path) -> None:
    _write_json(tmp_path / "composer.json", {"require": {"woocommerce/woocommerce": "^8.0"}})

    assert detect_platforms(tmp_path).detected == ("woocommerce",)


def test_magento_composer_requirement(tmp_path: Path) -> None:
    _write_json(tmp_path / "composer.json", {"require": {"magento/product-community-edition": "2.4.7"}})

    assert detect_platforms(tmp_path).detected == ("magento",)


def test_magento_binary(tmp_path: Path) -> None:
    (tmp_path / "bin").mkdir()
    (tmp_path / "bin" / "magento").write_text("#!/usr/bin/env php\n", encoding="utf-8")

    assert detect_platforms(tmp_path).primary == "magento"


def test_malformed_manifests_are_ignored(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("{oops", encoding="utf-8")
    (tmp_path / "composer.json").write_text("[1, 2", encoding="utf-8")
    (tmp_path / "functions.php").write_text("<?php\n", encoding="utf-8")

    assert detect_platforms(tmp_path).detected == ("wordpress",)

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

import pytest

from tests.helpers.runners import STANDARD_SCRIPTS, ScriptedRunner, TickingClock
from verifyloop.orchestration.executor import CheckExecutor


@pytest.fixture
def runner() -> ScriptedRunner:
    """Return an empty scripted runner."""

    return ScriptedRunner()


@pytest.fixture
def executor(runner: ScriptedRunner) -> CheckExecutor:
    """Return an executor bound to ``runner`` and a deterministic clock."""

    return CheckExecutor(runner=runner, clock=TickingClock())


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing ``package.json`` into ``tmp_path``."""

    def _write(
        scripts: Iterable[str] = STANDARD_SCRIPTS,
        *,
        extra: Mapping[str, object] | None = None,
    ) -> Path:
        payload: dict[str, object] = {"name": "fixture", "scripts": {name: f"run {name}" for name in scripts}}
        payload.update(extra or {})
        (tmp_path / "package.json").write_text(json.dumps(payload), encoding="utf-8")
        return tmp_path

    return _write

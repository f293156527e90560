# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Verify CLI command."""

from __future__ import annotations

from typer import Typer

from ...shared import register_command
from .command import verify_command

__all__ = ["register"]


def register(app: Typer) -> None:
    """Register the verify command with ``app``.

    Args:
        app: Typer application receiving the verify command registration.
    """

    register_command(app, verify_command, name="verify")

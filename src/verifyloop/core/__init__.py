# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process, console, and logging primitives shared across verifyloop."""

from __future__ import annotations

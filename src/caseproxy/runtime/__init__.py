# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime services shared by the command-line entry points."""

from __future__ import annotations

from .console import ConsoleStyle, RichConsoleManager, detect_tty, get_console_manager

__all__ = ["ConsoleStyle", "RichConsoleManager", "detect_tty", "get_console_manager"]

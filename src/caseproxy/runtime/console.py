# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles for status lines and log records."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import TextIO

from rich.console import Console


def detect_tty(stream: TextIO | None = None) -> bool:
    """Return ``True`` when ``stream`` (stdout by default) is a terminal."""

    target = sys.stdout if stream is None else stream
    try:
        return target.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass(frozen=True, slots=True)
class ConsoleStyle:
    """Presentation flags a console is built for.

    Attributes:
        color: Whether ANSI colour is wanted when the stream is a terminal.
        emoji: Whether Rich may render emoji glyphs.
        stderr: Whether the console writes to standard error.
    """

    color: bool
    emoji: bool
    stderr: bool = False


class RichConsoleManager:
    """Hand out one :class:`Console` per :class:`ConsoleStyle` and terminal state.

    Consoles never bind a stream at construction, so output follows whatever
    ``sys.stdout``/``sys.stderr`` are when a line is printed.
    """

    def __init__(self) -> None:
        self._consoles: dict[tuple[ConsoleStyle, bool], Console] = {}

    def get(self, *, color: bool, emoji: bool, stderr: bool = False) -> Console:
        """Return the console matching the requested presentation.

        Args:
            color: ``True`` when colour output is wanted.
            emoji: ``True`` when emoji glyphs are wanted.
            stderr: ``True`` for a console writing to standard error.

        Returns:
            Console: Cached console for this style and terminal state.
        """

        style = ConsoleStyle(color=color, emoji=emoji, stderr=stderr)
        tty = detect_tty(sys.stderr if stderr else None)
        key = (style, tty)
        console = self._consoles.get(key)
        if console is None:
            colored = color and tty
            console = Console(
                stderr=stderr,
                color_system="auto" if colored else None,
                force_terminal=tty,
                no_color=not colored,
                emoji=emoji,
                soft_wrap=True,
            )
            self._consoles[key] = console
        return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide console manager."""

    return RichConsoleManager()


__all__ = [
    "ConsoleStyle",
    "RichConsoleManager",
    "detect_tty",
    "get_console_manager",
]

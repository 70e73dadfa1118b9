# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Status lines for the command-line tools and log routing for the library.

Status lines (``info``, ``ok``, ``warn``, ``fail``) are what a user of the
CLI reads on stdout. Library and server modules use ordinary module loggers,
which :func:`configure_logging` sends to stderr through Rich.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final

from rich.logging import RichHandler
from rich.text import Text

from .runtime.console import detect_tty, get_console_manager

PACKAGE_LOGGER: Final[str] = "caseproxy"


class Status(Enum):
    """Kinds of status line with their emoji prefix and colour."""

    INFO = ("ℹ️ ", "cyan")
    OK = ("✅ ", "green")
    WARN = ("⚠️ ", "yellow")
    FAIL = ("❌ ", "red")

    @property
    def symbol(self) -> str:
        return self.value[0]

    @property
    def style(self) -> str:
        return self.value[1]


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, else an empty string."""

    return symbol if enable else ""


def status_line(
    status: Status,
    msg: str,
    *,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    """Print ``msg`` as a status line of kind ``status``.

    Args:
        status: Kind of line, selecting prefix and colour.
        msg: Message text.
        use_emoji: Prefix the line with the status emoji.
        use_color: Force colour on or off; terminal detection decides when
            ``None``.
    """

    color = detect_tty() if use_color is None else use_color
    text = Text(emoji(status.symbol, use_emoji) + msg)
    if color:
        text.stylize(status.style)
    get_console_manager().get(color=color, emoji=use_emoji).print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    status_line(Status.INFO, msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    status_line(Status.OK, msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    status_line(Status.WARN, msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    status_line(Status.FAIL, msg, use_emoji=use_emoji, use_color=use_color)


def configure_logging(*, debug: bool = False) -> logging.Logger:
    """Send ``caseproxy`` log records to stderr through a Rich handler.

    Calling this more than once only adjusts the level.

    Args:
        debug: Emit ``DEBUG`` records when ``True``; ``INFO`` otherwise.

    Returns:
        logging.Logger: The package logger.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        console = get_console_manager().get(color=True, emoji=False, stderr=True)
        logger.addHandler(RichHandler(console=console, show_path=False, markup=False))
    return logger


__all__ = [
    "PACKAGE_LOGGER",
    "Status",
    "configure_logging",
    "emoji",
    "fail",
    "info",
    "ok",
    "status_line",
    "warn",
]

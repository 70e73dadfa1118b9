# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error type and output adapter shared by the CLI commands."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final

import typer
from rich.console import Console
from rich.text import Text

from ..logging import Status, status_line

_SETTING_PATTERN: Final[re.Pattern[str]] = re.compile(r"([\w-]+)=(\S+)")


class CLIError(RuntimeError):
    """Command failure carrying the process exit status to use."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Status output for one command invocation.

    Attributes:
        console: Console used for debug lines.
        use_emoji: Prefix status lines with emoji.
        debug_enabled: Print :meth:`debug` lines.
    """

    console: Console = field(default_factory=Console)
    use_emoji: bool = True
    debug_enabled: bool = False

    def _status(self, status: Status, message: str) -> None:
        status_line(status, message, use_emoji=self.use_emoji)

    def fail(self, message: str) -> None:
        self._status(Status.FAIL, message)

    def warn(self, message: str) -> None:
        self._status(Status.WARN, message)

    def ok(self, message: str) -> None:
        self._status(Status.OK, message)

    def info(self, message: str) -> None:
        self._status(Status.INFO, message)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout verbatim, without adding a newline."""

        typer.echo(message, nl=False)

    def debug(self, message: str) -> None:
        """Print ``message`` with ``name=value`` settings highlighted.

        Nothing is printed unless debug output was requested.

        Args:
            message: Free text, typically a run of ``name=value`` settings.
        """

        if not self.debug_enabled:
            return
        text = Text("[debug] ", style="bold cyan")
        text.append(message)
        text.highlight_regex(_SETTING_PATTERN, style="bold green")
        self.console.print(text)


def build_cli_logger(*, emoji: bool, debug: bool = False, no_color: bool = False) -> CLILogger:
    """Return a :class:`CLILogger` for one command invocation.

    Args:
        emoji: Whether status lines may include emoji.
        debug: Whether debug lines are printed.
        no_color: Disable colour on the debug console.

    Returns:
        CLILogger: Logger with its own debug console.
    """

    console = Console(no_color=no_color, highlight=False)
    return CLILogger(console=console, use_emoji=emoji, debug_enabled=debug)


__all__: Final = [
    "CLIError",
    "CLILogger",
    "build_cli_logger",
]

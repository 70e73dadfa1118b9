# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for console and logging helpers."""

from __future__ import annotations

import io
import logging

from rich.console import Console
from rich.logging import RichHandler

from caseproxy.cli.shared import CLILogger, build_cli_logger
from caseproxy.logging import configure_logging, emoji, ok, warn


def test_emoji_toggle() -> None:
    assert emoji("✅", True) == "✅"
    assert emoji("✅", False) == ""


def test_messages_without_emoji(capsys) -> None:
    ok("done", use_emoji=False, use_color=False)
    warn("careful", use_emoji=False, use_color=False)

    assert capsys.readouterr().out.splitlines() == ["done", "careful"]


def test_messages_with_emoji(capsys) -> None:
    ok("done", use_emoji=True, use_color=False)

    assert capsys.readouterr().out.startswith("✅")


def test_configure_logging_installs_one_handler() -> None:
    logger = logging.getLogger("caseproxy")

    configure_logging()
    configure_logging(debug=True)

    handlers = [handler for handler in logger.handlers if isinstance(handler, RichHandler)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG
    configure_logging()
    assert logger.level == logging.INFO


def test_cli_logger_debug_is_gated() -> None:
    buffer = io.StringIO()
    console = Console(file=buffer, no_color=True, width=200)

    CLILogger(console=console, use_emoji=False).debug("hidden=1")
    CLILogger(console=console, use_emoji=False, debug_enabled=True).debug("root=/srv port=80")

    assert buffer.getvalue() == "[debug] root=/srv port=80\n"


def test_build_cli_logger_flags() -> None:
    logger = build_cli_logger(emoji=False, debug=True)

    assert not logger.use_emoji
    assert logger.debug_enabled

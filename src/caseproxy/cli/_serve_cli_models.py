# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared data structures for the serve CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

PORT_OPTION = Annotated[
    int | None,
    typer.Option("--port", "-p", help="TCP port to listen on."),
]
HOST_OPTION = Annotated[
    str | None,
    typer.Option("--host", "-H", help="Host name or address to bind (requires --port)."),
]
SOCKET_PATH_OPTION = Annotated[
    Path | None,
    typer.Option("--socket-path", "-s", help="Unix-domain socket to listen on."),
]
ROOT_PATH_OPTION = Annotated[
    Path | None,
    typer.Option("--root-path", "-r", help="Directory files are served from."),
]
URL_PREFIX_OPTION = Annotated[
    str | None,
    typer.Option("--url-prefix", "-u", help="URL prefix stripped from request paths."),
]
REDIRECT_HEADER_OPTION = Annotated[
    str | None,
    typer.Option(
        "--redirect-header",
        help="Emit this header (e.g. X-Accel-Redirect) instead of streaming files.",
    ),
]
REDIRECT_PREFIX_OPTION = Annotated[
    str | None,
    typer.Option("--redirect-prefix", help="Location prefix used with --redirect-header."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="TOML file with a [server] table."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Enable debug logging."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]


@dataclass(slots=True)
class ServeCLIOptions:
    """Capture CLI overrides supplied to the serve command."""

    config_file: Path | None
    port: int | None
    host: str | None
    socket_path: Path | None
    root_path: Path | None
    url_prefix: str | None
    redirect_header: str | None
    redirect_prefix: str | None
    debug: bool
    emoji: bool

    def overrides(self) -> dict[str, object]:
        """Return configuration overrides keyed by :class:`ServerConfig` field.

        Returns:
            dict[str, object]: Values given on the command line; unset options
            are ``None``.
        """

        return {
            "port": self.port,
            "host": self.host,
            "socket_path": self.socket_path,
            "root_path": self.root_path,
            "url_prefix": self.url_prefix,
            "redirect_header": self.redirect_header,
            "redirect_prefix": self.redirect_prefix,
        }


__all__ = [
    "CONFIG_OPTION",
    "DEBUG_OPTION",
    "EMOJI_OPTION",
    "HOST_OPTION",
    "PORT_OPTION",
    "REDIRECT_HEADER_OPTION",
    "REDIRECT_PREFIX_OPTION",
    "ROOT_PATH_OPTION",
    "SOCKET_PATH_OPTION",
    "ServeCLIOptions",
    "URL_PREFIX_OPTION",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command running the case-insensitive file server."""

from __future__ import annotations

import typer

from ..config import ConfigError, ServerConfig
from ..config_loader import load_server_config
from ..logging import configure_logging
from ..server import serve
from ._serve_cli_models import (
    CONFIG_OPTION,
    DEBUG_OPTION,
    EMOJI_OPTION,
    HOST_OPTION,
    PORT_OPTION,
    REDIRECT_HEADER_OPTION,
    REDIRECT_PREFIX_OPTION,
    ROOT_PATH_OPTION,
    SOCKET_PATH_OPTION,
    URL_PREFIX_OPTION,
    ServeCLIOptions,
)
from .shared import CLIError, CLILogger, build_cli_logger


def build_server_config(options: ServeCLIOptions) -> ServerConfig:
    """Return the validated server configuration for ``options``.

    Args:
        options: Parsed command-line options.

    Returns:
        ServerConfig: Configuration passed to the server.

    Raises:
        CLIError: If the options or configuration file are invalid.
    """

    if options.host is not None and options.port is None and options.socket_path is not None:
        raise CLIError("--host requires --port", exit_code=2)
    try:
        return load_server_config(options.config_file, options.overrides())
    except ConfigError as exc:
        raise CLIError(str(exc), exit_code=2) from exc


def _announce(config: ServerConfig, logger: CLILogger) -> None:
    logger.debug(
        f"root={config.root_path} url_prefix={config.url_prefix} "
        f"delivery={config.delivery_mode.value} listen={config.listen_target}"
    )
    if not config.root_path.is_dir():
        logger.warn(f"root path {config.root_path} is not a directory; every request will fail")
    logger.ok(f"Serving {config.root_path} on {config.listen_target}")


def serve_command(
    port: PORT_OPTION = None,
    host: HOST_OPTION = None,
    socket_path: SOCKET_PATH_OPTION = None,
    root_path: ROOT_PATH_OPTION = None,
    url_prefix: URL_PREFIX_OPTION = None,
    redirect_header: REDIRECT_HEADER_OPTION = None,
    redirect_prefix: REDIRECT_PREFIX_OPTION = None,
    config_file: CONFIG_OPTION = None,
    debug: DEBUG_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Serve files from the root directory, matching request paths case-insensitively."""

    options = ServeCLIOptions(
        config_file=config_file,
        port=port,
        host=host,
        socket_path=socket_path,
        root_path=root_path,
        url_prefix=url_prefix,
        redirect_header=redirect_header,
        redirect_prefix=redirect_prefix,
        debug=debug,
        emoji=emoji,
    )
    logger = build_cli_logger(emoji=options.emoji, debug=options.debug)
    try:
        config = build_server_config(options)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    configure_logging(debug=options.debug)
    _announce(config, logger)
    try:
        serve(config)
    except (ConfigError, OSError) as exc:
        logger.fail(f"cannot listen on {config.listen_target}: {exc}")
        raise typer.Exit(code=1) from exc


__all__ = ["build_server_config", "serve_command"]

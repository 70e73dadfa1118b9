# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load server configuration from TOML files, argfiles and CLI overrides."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .config import ConfigError, ServerConfig

SERVER_SECTION_KEY: Final[str] = "server"
ARGFILE_PREFIX: Final[str] = "@"


def _read_toml(path: Path) -> dict[str, Any]:
    """Return the parsed TOML document at ``path``.

    Args:
        path: Location of the configuration file.

    Returns:
        dict[str, Any]: Parsed document.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"cannot read configuration file {path}: {exc.strerror or exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def _server_section(document: Mapping[str, Any], path: Path) -> dict[str, Any]:
    section = document.get(SERVER_SECTION_KEY, document)
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{SERVER_SECTION_KEY}] in {path} must be a table")
    return dict(section)


def _format_validation_error(exc: ValidationError) -> str:
    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = str(error.get("msg", "invalid value")).removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


def load_server_config(
    config_file: Path | None = None,
    overrides: Mapping[str, object] | None = None,
) -> ServerConfig:
    """Build a validated :class:`ServerConfig`.

    Args:
        config_file: Optional TOML file; settings are read from its
            ``[server]`` table, or from the top level when that table is absent.
        overrides: Values supplied on the command line. ``None`` values are
            ignored so file settings and defaults survive.

    Returns:
        ServerConfig: Validated configuration.

    Raises:
        ConfigError: If the file is unreadable or the merged settings are invalid.
    """

    payload: dict[str, Any] = {}
    if config_file is not None:
        payload.update(_server_section(_read_toml(config_file), config_file))
    for key, value in (overrides or {}).items():
        if value is not None:
            payload[key] = value
    try:
        return ServerConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(_format_validation_error(exc)) from exc


def expand_argfiles(
    args: Sequence[str],
    *,
    prefix: str = ARGFILE_PREFIX,
    _stack: tuple[Path, ...] = (),
) -> list[str]:
    """Replace ``@file`` arguments with the lines of ``file``.

    Each non-blank line of an argfile is one argument. Argfiles may reference
    further argfiles.

    Args:
        args: Raw command-line arguments.
        prefix: Marker introducing an argfile reference.

    Returns:
        list[str]: Arguments with every argfile reference expanded.

    Raises:
        ConfigError: If an argfile is unreadable or references itself.
    """

    expanded: list[str] = []
    for arg in args:
        if not arg.startswith(prefix) or len(arg) == len(prefix):
            expanded.append(arg)
            continue
        path = Path(arg[len(prefix) :])
        resolved = path.resolve()
        if resolved in _stack:
            chain = " -> ".join(str(entry) for entry in (*_stack, resolved))
            raise ConfigError(f"circular argfile reference: {chain}")
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"cannot read argfile {path}: {exc.strerror or exc}") from exc
        lines = [line for line in content.splitlines() if line.strip()]
        expanded.extend(expand_argfiles(lines, prefix=prefix, _stack=(*_stack, resolved)))
    return expanded


__all__ = ["ARGFILE_PREFIX", "expand_argfiles", "load_server_config"]

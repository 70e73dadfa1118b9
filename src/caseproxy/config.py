# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the caseproxy server and duplicate finder."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Final, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_HOST: Final[str] = "localhost"
DEFAULT_URL_PREFIX: Final[str] = "/"
DEFAULT_REDIRECT_PREFIX: Final[str] = "/"
DEFAULT_HASH_CHUNK_SIZE: Final[int] = 8192
MAX_PORT: Final[int] = 65535


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class DeliveryMode(StrEnum):
    """How the server hands a resolved file to the client."""

    STREAM = "stream"
    REDIRECT = "redirect"


class ServerConfig(BaseModel):
    """Settings for the case-insensitive file server.

    Exactly one listener is configured: a TCP ``host``/``port`` pair or a
    Unix-domain ``socket_path``. Setting ``redirect_header`` switches
    delivery from streaming bodies to emitting that header for a front-end
    proxy.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    root_path: Path = Path(".")
    url_prefix: str = DEFAULT_URL_PREFIX
    host: str = DEFAULT_HOST
    port: int | None = Field(default=None, ge=0, le=MAX_PORT)
    socket_path: Path | None = None
    redirect_header: str | None = None
    redirect_prefix: str = DEFAULT_REDIRECT_PREFIX

    @field_validator("url_prefix")
    @classmethod
    def _check_url_prefix(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("url_prefix must start with '/'")
        return value

    @field_validator("redirect_header")
    @classmethod
    def _check_redirect_header(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        if not stripped or any(char in stripped for char in ": \r\n"):
            raise ValueError("redirect_header must be a bare HTTP header name")
        return stripped

    @model_validator(mode="after")
    def _check_listener(self) -> Self:
        if self.port is None and self.socket_path is None:
            raise ValueError("One of --port or --socket-path must be given")
        if self.port is not None and self.socket_path is not None:
            raise ValueError("--port and --socket-path are mutually exclusive")
        return self

    @property
    def delivery_mode(self) -> DeliveryMode:
        """Return the configured delivery mode."""

        return DeliveryMode.STREAM if self.redirect_header is None else DeliveryMode.REDIRECT

    @property
    def listen_target(self) -> str:
        """Return a human-readable description of the listener."""

        if self.socket_path is not None:
            return f"unix:{self.socket_path}"
        return f"{self.host}:{self.port}"


class DupeFinderConfig(BaseModel):
    """Settings for the case-duplicate finder."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    root_dir: Path
    html: Path | None = None
    chunk_size: int = Field(default=DEFAULT_HASH_CHUNK_SIZE, gt=0)


__all__ = [
    "ConfigError",
    "DeliveryMode",
    "DupeFinderConfig",
    "ServerConfig",
]

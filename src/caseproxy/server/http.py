# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""HTTP transport serving files resolved case-insensitively.

Every connection is handled on its own thread so blocking directory reads in
the resolver never stall the accept loop.
"""

from __future__ import annotations

import logging
import mimetypes
import os
import shutil
import socket
import socketserver
from collections.abc import Callable
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Final

from ..config import ConfigError, ServerConfig
from .handler import ResponsePlan, plan_response

LOGGER = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE: Final[str] = "application/octet-stream"
SERVER_VERSION: Final[str] = "caseproxy"


class CaseProxyRequestHandler(BaseHTTPRequestHandler):
    """Serve ``GET`` and ``HEAD`` requests from the configured root."""

    server_version = SERVER_VERSION
    protocol_version = "HTTP/1.1"

    @property
    def config(self) -> ServerConfig:
        """Return the configuration attached to the owning server."""

        return self.server.config  # type: ignore[attr-defined]

    def do_GET(self) -> None:
        """Answer a ``GET`` request."""

        self._respond(send_body=True)

    def do_HEAD(self) -> None:
        """Answer a ``HEAD`` request."""

        self._respond(send_body=False)

    def _respond(self, *, send_body: bool) -> None:
        plan = plan_response(self.path, self.config)
        if not plan.is_success:
            LOGGER.debug("%s -> %d %s", self.path, plan.status, plan.reason)
            self.send_error(plan.status, explain=plan.reason)
            return
        if plan.file_path is None:
            self._send_redirect(plan)
            return
        self._send_file(plan.file_path, send_body=send_body)

    def _send_redirect(self, plan: ResponsePlan) -> None:
        self.send_response(HTTPStatus.OK)
        for name, value in plan.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def _send_file(self, path: Path, *, send_body: bool) -> None:
        try:
            handle = path.open("rb")
        except FileNotFoundError:
            self.send_error(HTTPStatus.NOT_FOUND)
            return
        except PermissionError:
            self.send_error(HTTPStatus.FORBIDDEN)
            return
        except OSError as exc:
            LOGGER.error("cannot open %s: %s", path, exc)
            self.send_error(HTTPStatus.INTERNAL_SERVER_ERROR)
            return
        with handle:
            size = os.fstat(handle.fileno()).st_size
            content_type, _ = mimetypes.guess_type(path.name)
            self.send_response(HTTPStatus.OK)
            self.send_header("Content-Type", content_type or DEFAULT_CONTENT_TYPE)
            self.send_header("Content-Length", str(size))
            self.end_headers()
            if send_body:
                shutil.copyfileobj(handle, self.wfile)

    def address_string(self) -> str:
        """Return the client address, tolerating Unix-socket peers."""

        if isinstance(self.client_address, tuple) and self.client_address:
            return str(self.client_address[0])
        return "unix"

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Send access log lines to the module logger instead of stderr."""

        LOGGER.info("%s - %s", self.address_string(), format % args)


class CaseProxyHTTPServer(ThreadingHTTPServer):
    """Threading TCP server carrying the server configuration."""

    daemon_threads = True

    def __init__(
        self,
        address: tuple[str, int] | tuple[str, int, int, int],
        config: ServerConfig,
        handler: type[BaseHTTPRequestHandler] = CaseProxyRequestHandler,
    ) -> None:
        self.config = config
        super().__init__(address, handler)


class CaseProxyHTTPServerV6(CaseProxyHTTPServer):
    """IPv6 variant of :class:`CaseProxyHTTPServer`."""

    address_family = socket.AF_INET6


class CaseProxyUnixServer(socketserver.ThreadingMixIn, socketserver.UnixStreamServer):
    """Threading Unix-domain socket server carrying the server configuration."""

    daemon_threads = True

    def __init__(
        self,
        socket_path: Path,
        config: ServerConfig,
        handler: type[BaseHTTPRequestHandler] = CaseProxyRequestHandler,
    ) -> None:
        self.config = config
        super().__init__(os.fspath(socket_path), handler)


AddressResolver = Callable[..., list[tuple]]


def resolve_bind_address(
    host: str,
    port: int,
    *,
    getaddrinfo: AddressResolver = socket.getaddrinfo,
) -> tuple[int, tuple]:
    """Return the address family and socket address to bind for ``host``.

    IPv4 candidates are preferred over IPv6 ones.

    Args:
        host: Hostname or literal address.
        port: TCP port.
        getaddrinfo: Address lookup function, replaceable for testing.

    Returns:
        tuple[int, tuple]: Address family and socket address.

    Raises:
        ConfigError: If the lookup fails or yields no addresses.
    """

    try:
        candidates = getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except socket.gaierror as exc:
        raise ConfigError(f"invalid host address {host}:{port}: {exc}") from exc
    if not candidates:
        raise ConfigError(f"lookup of hostname {host}:{port} yields zero addresses")
    ordered = sorted(candidates, key=lambda entry: entry[0] == socket.AF_INET6)
    family, _, _, _, address = ordered[0]
    return family, address


def create_server(config: ServerConfig) -> socketserver.BaseServer:
    """Bind the listener described by ``config``.

    Args:
        config: Validated server configuration.

    Returns:
        socketserver.BaseServer: Bound server ready for ``serve_forever``.
    """

    if config.socket_path is not None:
        return CaseProxyUnixServer(config.socket_path, config)
    if config.port is None:
        raise ConfigError("One of --port or --socket-path must be given")
    family, address = resolve_bind_address(config.host, config.port)
    server_class = CaseProxyHTTPServerV6 if family == socket.AF_INET6 else CaseProxyHTTPServer
    return server_class(address, config)


def serve(config: ServerConfig) -> None:
    """Serve requests until interrupted.

    Args:
        config: Validated server configuration.
    """

    server = create_server(config)
    LOGGER.info("serving %s on %s", config.root_path, config.listen_target)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        LOGGER.info("shutting down")
    finally:
        server.server_close()
        if config.socket_path is not None:
            config.socket_path.unlink(missing_ok=True)


__all__ = [
    "CaseProxyHTTPServer",
    "CaseProxyRequestHandler",
    "CaseProxyUnixServer",
    "create_server",
    "resolve_bind_address",
    "serve",
]

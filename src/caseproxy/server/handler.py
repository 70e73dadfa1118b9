# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate request URLs into case-insensitive file lookups.

This module holds the transport-independent half of the server: it decides
which file answers a request and how it should be delivered, leaving socket
handling to :mod:`caseproxy.server.http`.
"""

from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass, field
from http import HTTPStatus
from pathlib import Path
from typing import Final
from urllib.parse import quote_from_bytes, unquote_to_bytes, urlsplit

from ..config import DeliveryMode, ServerConfig
from ..errors import DirectoryReadError, NotUnderRootError
from ..filesystem.components import join_components
from ..filesystem.paths import (
    display_path,
    display_relative_path,
    is_within_root,
    resolve_parents,
    strip_root,
)
from ..resolver import DirectoryLister, find_matching_files, scan_directory

LOGGER = logging.getLogger(__name__)

_SEPARATOR: Final[bytes] = b"/"
_NUL: Final[bytes] = b"\x00"
_NOT_FOUND_ERRNOS: Final[frozenset[int]] = frozenset({errno.ENOENT, errno.ENOTDIR})
_FORBIDDEN_ERRNOS: Final[frozenset[int]] = frozenset({errno.EACCES, errno.EPERM})


@dataclass(frozen=True, slots=True)
class ResponsePlan:
    """Outcome of resolving one request.

    Attributes:
        status: HTTP status to send.
        file_path: File whose bytes form the body, for streamed deliveries.
        headers: Extra response headers, such as a proxy redirect header.
        reason: Short explanation sent in error bodies; never holds the root path.
    """

    status: HTTPStatus
    file_path: Path | None = None
    headers: dict[str, str] = field(default_factory=dict)
    reason: str = ""

    @property
    def is_success(self) -> bool:
        """Return ``True`` for a ``200 OK`` plan."""

        return self.status is HTTPStatus.OK


def _error(status: HTTPStatus, reason: str) -> ResponsePlan:
    return ResponsePlan(status=status, reason=reason)


def _request_path(request_target: str) -> bytes:
    """Return the percent-decoded path of an origin-form or absolute-form target."""

    if "://" in request_target:
        return unquote_to_bytes(urlsplit(request_target).path)
    path = request_target.partition("#")[0].partition("?")[0]
    return unquote_to_bytes(path)


def request_relative_path(request_target: str, url_prefix: str) -> bytes | None:
    """Return the root-relative path requested by ``request_target``.

    Args:
        request_target: Raw request target from the request line.
        url_prefix: Configured prefix every served URL starts with.

    Returns:
        bytes | None: Percent-decoded, parent-collapsed relative path, or
        ``None`` when the target does not start with ``url_prefix``.
    """

    raw_path = _request_path(request_target)
    prefix = url_prefix.encode("utf-8")
    if not raw_path.startswith(prefix):
        return None
    relative = raw_path[len(prefix) :]
    if relative and not prefix.endswith(_SEPARATOR) and not relative.startswith(_SEPARATOR):
        return None
    relative = relative.lstrip(_SEPARATOR)
    return resolve_parents(relative).lstrip(_SEPARATOR)


def _map_read_error(exc: DirectoryReadError, root: bytes) -> ResponsePlan:
    reason = f"cannot read directory /{display_relative_path(exc.directory, root).lstrip('/')}"
    code = exc.cause.errno
    if code in _NOT_FOUND_ERRNOS:
        LOGGER.debug("%s", exc)
        return _error(HTTPStatus.NOT_FOUND, reason)
    if code in _FORBIDDEN_ERRNOS:
        LOGGER.warning("%s", exc)
        return _error(HTTPStatus.FORBIDDEN, reason)
    LOGGER.error("%s", exc)
    return _error(HTTPStatus.INTERNAL_SERVER_ERROR, reason)


def _redirect_location(match: Path, root: bytes, prefix: str) -> str:
    relative = join_components(strip_root(match, root) or ())
    return prefix.rstrip("/") + "/" + quote_from_bytes(relative, safe="/")


def plan_response(
    request_target: str,
    config: ServerConfig,
    *,
    lister: DirectoryLister = scan_directory,
) -> ResponsePlan:
    """Decide how to answer a request for ``request_target``.

    The URL prefix is stripped, ``..`` segments are collapsed, and the
    remainder is resolved case-insensitively beneath ``config.root_path``.
    When several files match only by case, the first one discovered wins.

    Args:
        request_target: Raw request target from the request line.
        config: Server configuration.
        lister: Directory-listing primitive passed to the resolver.

    Returns:
        ResponsePlan: Status, file and headers for the response.
    """

    relative = request_relative_path(request_target, config.url_prefix)
    if relative is None:
        return _error(HTTPStatus.NOT_FOUND, "outside url prefix")
    if _NUL in relative:
        return _error(HTTPStatus.BAD_REQUEST, "NUL byte in path")
    if not relative:
        return _error(HTTPStatus.NOT_FOUND, "no file requested")
    if _request_path(request_target).endswith(_SEPARATOR):
        return _error(HTTPStatus.NOT_FOUND, "trailing separator names a directory")

    root = os.fsencode(os.path.abspath(config.root_path))
    target = os.path.join(root, relative)
    try:
        matches = find_matching_files(target, root, lister=lister)
    except NotUnderRootError as exc:
        LOGGER.warning("%s", exc)
        return _error(HTTPStatus.FORBIDDEN, "path is outside the served root")
    except DirectoryReadError as exc:
        return _map_read_error(exc, root)

    if not matches:
        return _error(HTTPStatus.NOT_FOUND, f"no match for {display_path(relative)}")
    match = matches[0]
    if len(matches) > 1:
        LOGGER.warning(
            "%d files match %s; serving %s",
            len(matches),
            display_path(relative),
            display_path(match),
        )
    if not is_within_root(match, root):
        LOGGER.warning("%s escapes the root %s", display_path(match), display_path(root))
        return _error(HTTPStatus.FORBIDDEN, "path is outside the served root")
    if match.is_dir():
        return _error(HTTPStatus.NOT_FOUND, f"{display_relative_path(match, root)} is a directory")

    if config.delivery_mode is DeliveryMode.REDIRECT and config.redirect_header is not None:
        location = _redirect_location(match, root, config.redirect_prefix)
        return ResponsePlan(status=HTTPStatus.OK, headers={config.redirect_header: location})
    return ResponsePlan(status=HTTPStatus.OK, file_path=match)


__all__ = ["ResponsePlan", "plan_response", "request_relative_path"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Case-insensitive HTTP file server."""

from __future__ import annotations

from .handler import ResponsePlan, plan_response, request_relative_path
from .http import (
    CaseProxyHTTPServer,
    CaseProxyRequestHandler,
    CaseProxyUnixServer,
    create_server,
    resolve_bind_address,
    serve,
)

__all__ = [
    "CaseProxyHTTPServer",
    "CaseProxyRequestHandler",
    "CaseProxyUnixServer",
    "ResponsePlan",
    "create_server",
    "plan_response",
    "request_relative_path",
    "resolve_bind_address",
    "serve",
]

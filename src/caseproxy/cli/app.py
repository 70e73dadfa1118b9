# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

import sys
from collections.abc import Sequence

import typer

from ..config import ConfigError
from ..config_loader import expand_argfiles
from .dupes import find_duplicates_command
from .serve import serve_command
from .typer_ext import TyperAppConfig, create_typer

app = create_typer(config=TyperAppConfig(help_text="Case-insensitive file server and tools."))
app.command("serve")(serve_command)
app.command("dupes")(find_duplicates_command)


def main(argv: Sequence[str] | None = None) -> None:
    """Run the ``caseproxy`` entry point after expanding ``@argfile`` arguments.

    Args:
        argv: Arguments excluding the program name; defaults to ``sys.argv``.
    """

    raw_args = list(sys.argv[1:] if argv is None else argv)
    try:
        args = expand_argfiles(raw_args)
    except ConfigError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise SystemExit(2) from exc
    app(args=args, prog_name="caseproxy")


__all__ = ["app", "main"]

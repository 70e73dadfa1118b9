# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application factory with project-wide defaults."""

from __future__ import annotations

from dataclasses import dataclass

import typer


@dataclass(frozen=True, slots=True)
class TyperAppConfig:
    """Options applied when constructing a Typer application."""

    help_text: str
    name: str | None = None
    no_args_is_help: bool = True


def create_typer(*, config: TyperAppConfig) -> typer.Typer:
    """Return a Typer application configured from ``config``.

    Args:
        config: Application metadata and behaviour flags.

    Returns:
        typer.Typer: Application with shell completion disabled.
    """

    return typer.Typer(
        name=config.name,
        help=config.help_text,
        no_args_is_help=config.no_args_is_help,
        add_completion=False,
        pretty_exceptions_enable=False,
    )


__all__ = ["TyperAppConfig", "create_typer"]

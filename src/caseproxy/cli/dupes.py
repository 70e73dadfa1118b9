# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command reporting files whose paths differ only by letter case."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from ..config import DEFAULT_HASH_CHUNK_SIZE, DupeFinderConfig
from ..dupes import DuplicateScan, ScanError, find_case_duplicates, render_html_report, render_text_report
from ..logging import configure_logging
from .shared import CLIError, CLILogger, build_cli_logger
from .typer_ext import TyperAppConfig, create_typer

ROOT_DIR_ARGUMENT = Annotated[
    Path,
    typer.Argument(help="Directory tree to scan."),
]
HTML_OPTION = Annotated[
    Path | None,
    typer.Option("--html", help="Path to save an HTML report to."),
]
CHUNK_SIZE_OPTION = Annotated[
    int,
    typer.Option("--chunk-size", help="Bytes read per hashing step."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]

dupes_app = create_typer(
    config=TyperAppConfig(
        name="dupe-finder",
        help_text="Report files whose paths differ only by letter case.",
    ),
)


def _build_config(root_dir: Path, html: Path | None, chunk_size: int) -> DupeFinderConfig:
    try:
        return DupeFinderConfig(root_dir=root_dir, html=html, chunk_size=chunk_size)
    except ValidationError as exc:
        messages = "; ".join(str(error.get("msg", "invalid value")) for error in exc.errors())
        raise CLIError(messages, exit_code=2) from exc


def _emit_report(scan: DuplicateScan, config: DupeFinderConfig, logger: CLILogger) -> None:
    if config.html is None:
        logger.echo(render_text_report(scan.groups, scan.hashes))
        return
    try:
        config.html.write_text(render_html_report(scan.groups, scan.hashes), encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"cannot write report to {config.html}: {exc.strerror or exc}") from exc
    logger.ok(f"Wrote {len(scan.groups)} duplicate group(s) to {config.html}")
    if scan.unreadable:
        logger.warn(f"{len(scan.unreadable)} file(s) could not be hashed")


@dupes_app.command()
def find_duplicates_command(
    root_dir: ROOT_DIR_ARGUMENT,
    html: HTML_OPTION = None,
    chunk_size: CHUNK_SIZE_OPTION = DEFAULT_HASH_CHUNK_SIZE,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Scan ROOT_DIR and report groups of case-colliding files with their hashes."""

    logger = build_cli_logger(emoji=emoji)
    configure_logging()
    try:
        config = _build_config(root_dir, html, chunk_size)
        scan = find_case_duplicates(config)
        _emit_report(scan, config, logger)
    except ScanError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc


def main() -> None:
    """Run the standalone ``dupe-finder`` entry point."""

    dupes_app(args=sys.argv[1:], prog_name="dupe-finder")


__all__ = ["dupes_app", "find_duplicates_command", "main"]

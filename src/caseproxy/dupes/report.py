# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render duplicate-finder results as plain text or HTML."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from html import escape
from pathlib import Path
from typing import Final

from ..filesystem.paths import display_path
from .hashing import HASH_MISSING
from .scan import DuplicateGroup

HTML_STYLE: Final[tuple[str, ...]] = (
    "<style>",
    "table { border-collapse: collapse; width: 100%; }",
    "td:first-child { width: 100%; }",
    "table, tr, th, td { border: 1px solid black; }",
    "</style>",
)


def render_text_report(groups: Sequence[DuplicateGroup], hashes: Mapping[Path, str]) -> str:
    """Return a line-oriented report of ``groups``.

    Each group prints its shared path followed by one `` => path hash`` line
    per member.

    Args:
        groups: Duplicate groups to report.
        hashes: Content digests keyed by member path.

    Returns:
        str: Report text, newline terminated when non-empty.
    """

    lines: list[str] = []
    for group in groups:
        lines.append(display_path(group.key))
        for path in group.paths:
            lines.append(f" => {display_path(path)} {hashes.get(path, HASH_MISSING)}")
    return "".join(f"{line}\n" for line in lines)


def render_html_report(groups: Sequence[DuplicateGroup], hashes: Mapping[Path, str]) -> str:
    """Return an HTML document with one table per duplicate group.

    Args:
        groups: Duplicate groups to report.
        hashes: Content digests keyed by member path.

    Returns:
        str: HTML fragment containing a style block and the group tables.
    """

    lines = list(HTML_STYLE)
    for group in groups:
        lines.append(f"<h3>{escape(display_path(group.key))}</h3>")
        lines.append("<table>")
        lines.append("<tr><th>path</th><th>hash</th></tr>")
        for path in group.paths:
            digest = escape(hashes.get(path, HASH_MISSING))
            lines.append(f"<tr><td>{escape(display_path(path))}</td>\n<td>{digest}</td></tr>")
        lines.append("</table>")
    return "".join(f"{line}\n" for line in lines)


__all__ = ["HTML_STYLE", "render_html_report", "render_text_report"]

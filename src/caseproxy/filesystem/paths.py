# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Textual helpers for reasoning about filesystem paths."""

from __future__ import annotations

import os
from typing import AnyStr, overload

from .components import (
    Component,
    ComponentKind,
    Pathish,
    join_components,
    split_components,
)

_DISPLAY_ERRORS = "backslashreplace"


def _collapse_parents(components: tuple[Component, ...]) -> list[Component]:
    """Return ``components`` with parent markers folded into their predecessor.

    Args:
        components: Components in path order.

    Returns:
        list[Component]: Components without parent markers. A bare root or
        bare current-directory marker is never popped.
    """

    result: list[Component] = []
    for component in components:
        if component.kind is not ComponentKind.PARENT:
            result.append(component)
            continue
        if not result:
            continue
        if len(result) == 1 and result[0].kind in (ComponentKind.ROOT, ComponentKind.CURRENT):
            continue
        result.pop()
    return result


@overload
def resolve_parents(path: bytes) -> bytes: ...


@overload
def resolve_parents(path: str | os.PathLike[str]) -> str: ...


def resolve_parents(path: Pathish) -> str | bytes:
    """Collapse ``..`` segments in ``path`` without touching the filesystem.

    Climbing above a leading root or ``.`` marker is a no-op, so
    ``"/a/../.."`` becomes ``"/"`` and ``"a/../.."`` becomes ``""``.

    Args:
        path: Path to normalise.

    Returns:
        str | bytes: Normalised path; bytes in, bytes out, text otherwise.
    """

    raw = os.fsencode(path)
    collapsed = join_components(_collapse_parents(split_components(raw)))
    if isinstance(path, bytes):
        return collapsed
    return os.fsdecode(collapsed)


def is_within_root(path: Pathish, root: Pathish) -> bool:
    """Return ``True`` when ``path`` lies textually beneath ``root``.

    Args:
        path: Candidate path.
        root: Directory that must prefix ``path``.

    Returns:
        bool: ``True`` when the components of ``root`` prefix those of
        ``path`` and no parent marker follows them.
    """

    root_components = split_components(root)
    path_components = split_components(path)
    if path_components[: len(root_components)] != root_components:
        return False
    remainder = path_components[len(root_components) :]
    return all(component.kind is ComponentKind.NORMAL for component in remainder)


def strip_root(path: Pathish, root: Pathish) -> tuple[Component, ...] | None:
    """Return the components of ``path`` following ``root``.

    Args:
        path: Candidate path.
        root: Directory expected to prefix ``path`` literally.

    Returns:
        tuple[Component, ...] | None: Remaining components, or ``None`` when
        ``root`` is not a byte-for-byte component prefix of ``path``.
    """

    root_components = split_components(root)
    path_components = split_components(path)
    if path_components[: len(root_components)] != root_components:
        return None
    return path_components[len(root_components) :]


def display_path(path: Pathish) -> str:
    """Return a printable rendering of ``path``.

    Args:
        path: Path that may contain bytes that are not valid UTF-8.

    Returns:
        str: Text with undecodable bytes rendered as ``\\xNN`` escapes.
    """

    return os.fsencode(path).decode("utf-8", _DISPLAY_ERRORS)


def display_relative_path(path: Pathish, root: Pathish) -> str:
    """Return ``path`` relative to ``root`` for display, or ``path`` itself.

    Args:
        path: Path to present to the user.
        root: Base directory used for relativisation.

    Returns:
        str: Root-relative display text when ``root`` prefixes ``path``,
        otherwise the full display text.
    """

    remainder = strip_root(path, root)
    if remainder is None:
        return display_path(path)
    return display_path(join_components(remainder))


__all__ = (
    "display_path",
    "display_relative_path",
    "is_within_root",
    "resolve_parents",
    "strip_root",
)

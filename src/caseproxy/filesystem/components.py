# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Split OS-native paths into typed components and join them back."""

from __future__ import annotations

import os
from collections.abc import Iterable
from enum import IntEnum
from os import PathLike
from typing import Final, NamedTuple

Pathish = str | bytes | PathLike[str] | PathLike[bytes]

SEPARATOR: Final[bytes] = os.sep.encode("ascii")
_ALT_SEPARATOR: Final[bytes | None] = os.altsep.encode("ascii") if os.altsep else None
CURRENT_MARKER: Final[bytes] = b"."
PARENT_MARKER: Final[bytes] = b".."


class ComponentKind(IntEnum):
    """Component kinds ordered the way mismatched kinds compare literally."""

    ROOT = 0
    CURRENT = 1
    PARENT = 2
    NORMAL = 3


class Component(NamedTuple):
    """A single typed path component.

    Attributes:
        kind: Component classification.
        name: Literal bytes of the component; markers carry their own text.
    """

    kind: ComponentKind
    name: bytes

    @property
    def is_normal(self) -> bool:
        """Return ``True`` for named segments."""

        return self.kind is ComponentKind.NORMAL


ROOT: Final[Component] = Component(ComponentKind.ROOT, SEPARATOR)
CURRENT: Final[Component] = Component(ComponentKind.CURRENT, CURRENT_MARKER)
PARENT: Final[Component] = Component(ComponentKind.PARENT, PARENT_MARKER)


def split_components(path: Pathish) -> tuple[Component, ...]:
    """Return the typed components of ``path``.

    Empty segments produced by repeated separators are dropped and ``.`` is
    kept only when it leads a relative path.

    Args:
        path: Path as text, bytes, or a path-like object.

    Returns:
        tuple[Component, ...]: Components in path order.
    """

    raw = os.fsencode(path)
    if _ALT_SEPARATOR is not None:
        raw = raw.replace(_ALT_SEPARATOR, SEPARATOR)

    components: list[Component] = []
    has_root = raw.startswith(SEPARATOR)
    if has_root:
        components.append(ROOT)
    for index, segment in enumerate(raw.split(SEPARATOR)):
        if not segment:
            continue
        if segment == CURRENT_MARKER:
            if index == 0 and not has_root:
                components.append(CURRENT)
            continue
        if segment == PARENT_MARKER:
            components.append(PARENT)
        else:
            components.append(Component(ComponentKind.NORMAL, segment))
    return tuple(components)


def join_components(components: Iterable[Component]) -> bytes:
    """Join ``components`` back into an OS-native byte path.

    Args:
        components: Components as produced by :func:`split_components`.

    Returns:
        bytes: Joined path; empty when ``components`` is empty.
    """

    items = list(components)
    if items and items[0].kind is ComponentKind.ROOT:
        return SEPARATOR + SEPARATOR.join(component.name for component in items[1:])
    return SEPARATOR.join(component.name for component in items)


__all__ = [
    "CURRENT",
    "PARENT",
    "ROOT",
    "Component",
    "ComponentKind",
    "Pathish",
    "SEPARATOR",
    "join_components",
    "split_components",
]

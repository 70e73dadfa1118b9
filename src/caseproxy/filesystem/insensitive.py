# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Case-insensitive ordering, equality and hashing for whole paths."""

from __future__ import annotations

import hashlib
import os
from itertools import zip_longest
from pathlib import Path
from typing import Final

from ..folding import FoldedComponent, UnitKind, compare_names
from .components import Component, Pathish, split_components

_DIGEST_SIZE: Final[int] = 8
_SCALAR_WIDTH: Final[int] = 4


def compare_components(left: Component, right: Component) -> int:
    """Compare two components, folding case only for named segments.

    Args:
        left: First component.
        right: Second component.

    Returns:
        int: ``-1``, ``0`` or ``1``.
    """

    if left.is_normal and right.is_normal:
        return compare_names(left.name, right.name)
    left_key = (left.kind, left.name)
    right_key = (right.kind, right.name)
    if left_key == right_key:
        return 0
    return -1 if left_key < right_key else 1


def compare_paths(left: Pathish | InsensitivePath, right: Pathish | InsensitivePath) -> int:
    """Compare two paths component by component, ignoring letter case.

    A path that runs out of components first sorts first.

    Args:
        left: First path.
        right: Second path.

    Returns:
        int: ``-1``, ``0`` or ``1``.
    """

    left_components = _components_of(left)
    right_components = _components_of(right)
    for left_component, right_component in zip_longest(left_components, right_components):
        if left_component is None:
            return -1
        if right_component is None:
            return 1
        order = compare_components(left_component, right_component)
        if order:
            return order
    return 0


def fold_digest(path: Pathish | InsensitivePath) -> bytes:
    """Return a process-independent digest of the folded form of ``path``.

    Paths that compare equal under :func:`compare_paths` always produce the
    same digest.

    Args:
        path: Path to digest.

    Returns:
        bytes: BLAKE2b digest of the folded unit stream.
    """

    hasher = hashlib.blake2b(digest_size=_DIGEST_SIZE)
    for component in _components_of(path):
        hasher.update(bytes((component.kind,)))
        if not component.is_normal:
            hasher.update(component.name)
            continue
        for unit in FoldedComponent(component.name):
            if unit.kind is UnitKind.SCALAR:
                hasher.update(b"\x00" + unit.value.to_bytes(_SCALAR_WIDTH, "big"))
            else:
                hasher.update(b"\x01" + bytes((unit.value,)))
    return hasher.digest()


def _components_of(path: Pathish | InsensitivePath) -> tuple[Component, ...]:
    if isinstance(path, InsensitivePath):
        return path.components
    return split_components(path)


class InsensitivePath:
    """Path wrapper whose identity ignores letter case.

    Instances are immutable, hashable and ``os.PathLike`` so they can be used
    both as mapping keys and directly with filesystem calls.
    """

    __slots__ = ("_raw", "_components", "_digest")

    def __init__(self, path: Pathish) -> None:
        """Wrap ``path``.

        Args:
            path: Path as text, bytes, or a path-like object.
        """

        self._raw = os.fsencode(path)
        self._components = split_components(self._raw)
        self._digest: bytes | None = None

    @property
    def raw(self) -> bytes:
        """Return the wrapped path as OS-native bytes."""

        return self._raw

    @property
    def components(self) -> tuple[Component, ...]:
        """Return the typed components of the wrapped path."""

        return self._components

    @property
    def path(self) -> Path:
        """Return the wrapped path as a :class:`~pathlib.Path`."""

        return Path(os.fsdecode(self._raw))

    @property
    def fold_digest(self) -> bytes:
        """Return the cached case-folded digest of the path."""

        if self._digest is None:
            self._digest = fold_digest(self)
        return self._digest

    def compare(self, other: InsensitivePath) -> int:
        """Return ``-1``, ``0`` or ``1`` comparing against ``other``."""

        return compare_paths(self, other)

    def __fspath__(self) -> str:
        return os.fsdecode(self._raw)

    def __hash__(self) -> int:
        return int.from_bytes(self.fold_digest, "big", signed=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InsensitivePath):
            return NotImplemented
        return compare_paths(self, other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, InsensitivePath):
            return NotImplemented
        return compare_paths(self, other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, InsensitivePath):
            return NotImplemented
        return compare_paths(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, InsensitivePath):
            return NotImplemented
        return compare_paths(self, other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, InsensitivePath):
            return NotImplemented
        return compare_paths(self, other) >= 0

    def __repr__(self) -> str:
        return f"InsensitivePath({os.fsdecode(self._raw)!r})"


__all__ = [
    "InsensitivePath",
    "compare_components",
    "compare_paths",
    "fold_digest",
]

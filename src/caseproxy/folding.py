# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decompose raw path components into case-folded comparison units.

A path component on POSIX is an arbitrary byte string. Components are decoded
as UTF-8 one character at a time; any byte that cannot start a valid encoded
character at its position is emitted as a raw byte instead, so malformed
names still compare deterministically rather than raising.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from enum import IntEnum
from itertools import zip_longest
from os import PathLike
from typing import Final, NamedTuple

_Componentish = str | bytes | PathLike[str] | PathLike[bytes]

_UTF8: Final[str] = "utf-8"


class UnitKind(IntEnum):
    """Kinds of comparison unit; decoded scalars sort before raw bytes."""

    SCALAR = 0
    BYTE = 1


class FoldUnit(NamedTuple):
    """Single comparison unit: a Unicode scalar value or an undecodable byte."""

    kind: UnitKind
    value: int

    @property
    def is_scalar(self) -> bool:
        """Return ``True`` when the unit holds a decoded scalar value."""

        return self.kind is UnitKind.SCALAR


def _sequence_width(lead: int) -> int:
    """Return the UTF-8 sequence length announced by ``lead``.

    Args:
        lead: First byte of a candidate encoded character.

    Returns:
        int: Expected length between 1 and 4, or ``0`` when ``lead`` cannot
        start a sequence (continuation bytes and invalid lead bytes).
    """

    if lead < 0x80:
        return 1
    if 0xC0 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF7:
        return 4
    return 0


def as_component_bytes(component: _Componentish) -> bytes:
    """Return the OS-native byte representation of ``component``.

    Args:
        component: Component name as text, bytes, or a path-like object.

    Returns:
        bytes: Encoded form suitable for decomposition. Text is encoded with
        :func:`os.fsencode` so surrogate-escaped bytes round-trip.
    """

    return os.fsencode(component)


def decode_units(component: _Componentish) -> Iterator[FoldUnit]:
    """Yield scalar or raw-byte units covering every byte of ``component``.

    Args:
        component: Raw component name.

    Yields:
        FoldUnit: Decoded scalar values, or the leading byte of any run that
        does not decode, in input order.
    """

    raw = as_component_bytes(component)
    index = 0
    length = len(raw)
    while index < length:
        lead = raw[index]
        width = _sequence_width(lead)
        if width and index + width <= length:
            try:
                char = raw[index : index + width].decode(_UTF8)
            except UnicodeDecodeError:
                pass
            else:
                yield FoldUnit(UnitKind.SCALAR, ord(char))
                index += width
                continue
        yield FoldUnit(UnitKind.BYTE, lead)
        index += 1


def fold_units(units: Iterable[FoldUnit]) -> Iterator[FoldUnit]:
    """Apply full Unicode case folding to the scalar units of ``units``.

    Args:
        units: Units produced by :func:`decode_units`.

    Yields:
        FoldUnit: Folded scalar values (a single input may expand to several)
        and raw bytes passed through unchanged.
    """

    for unit in units:
        if unit.kind is UnitKind.BYTE:
            yield unit
            continue
        for char in chr(unit.value).casefold():
            yield FoldUnit(UnitKind.SCALAR, ord(char))


class FoldedComponent:
    """Restartable view over the case-folded units of one component."""

    __slots__ = ("_raw",)

    def __init__(self, component: _Componentish) -> None:
        self._raw = as_component_bytes(component)

    @property
    def raw(self) -> bytes:
        """Return the original component bytes."""

        return self._raw

    def __iter__(self) -> Iterator[FoldUnit]:
        return fold_units(decode_units(self._raw))

    def __repr__(self) -> str:
        return f"FoldedComponent({self._raw!r})"


def compare_names(left: _Componentish, right: _Componentish) -> int:
    """Compare two component names case-insensitively.

    The folded unit streams are walked in lockstep; the first differing unit
    decides, and a stream that runs out first sorts first.

    Args:
        left: First component name.
        right: Second component name.

    Returns:
        int: ``-1``, ``0`` or ``1`` as ``left`` sorts before, equal to, or
        after ``right``.
    """

    for left_unit, right_unit in zip_longest(FoldedComponent(left), FoldedComponent(right)):
        if left_unit is None:
            return -1
        if right_unit is None:
            return 1
        if left_unit != right_unit:
            return -1 if left_unit < right_unit else 1
    return 0


def names_equal(left: _Componentish, right: _Componentish) -> bool:
    """Return ``True`` when ``left`` and ``right`` match modulo case."""

    return compare_names(left, right) == 0


__all__ = [
    "FoldUnit",
    "FoldedComponent",
    "UnitKind",
    "as_component_bytes",
    "compare_names",
    "decode_units",
    "fold_units",
    "names_equal",
]

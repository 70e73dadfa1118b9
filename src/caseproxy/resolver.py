# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Find every on-disk path matching a target path modulo letter case.

The search expands breadth-first from the root, listing only directories that
lie on a path towards a potential match. Case collisions at any level fan out
into independent queue entries, so every combination of differently-cased
directories and files is discovered.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections import deque
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import DirectoryReadError, NotUnderRootError
from .filesystem.components import Component, Pathish
from .filesystem.paths import strip_root
from .folding import names_equal

LOGGER = logging.getLogger(__name__)

_CURRENT_DIRECTORY: Final[bytes] = os.curdir.encode("ascii")


@dataclass(frozen=True, slots=True)
class ListedEntry:
    """Directory entry as reported by the listing primitive."""

    name: bytes
    is_dir: bool


DirectoryLister = Callable[[bytes], Iterable[ListedEntry]]


def scan_directory(directory: bytes) -> list[ListedEntry]:
    """List ``directory`` without following symbolic links.

    Args:
        directory: Directory path as OS-native bytes.

    Returns:
        list[ListedEntry]: Entries in enumeration order.

    Raises:
        OSError: If the directory cannot be opened or read.
    """

    with os.scandir(directory) as entries:
        return [ListedEntry(entry.name, entry.is_dir(follow_symlinks=False)) for entry in entries]


@dataclass(frozen=True, slots=True)
class _QueueItem:
    """Confirmed concrete prefix plus the components still to resolve."""

    prefix: tuple[bytes, ...]
    remaining: Sequence[Component]


def _list(lister: DirectoryLister, directory: bytes) -> Iterable[ListedEntry]:
    try:
        return list(lister(directory))
    except OSError as exc:
        raise DirectoryReadError(directory, exc) from exc


def find_matching_files(
    target: Pathish,
    root: Pathish,
    *,
    lister: DirectoryLister = scan_directory,
) -> list[Path]:
    """Return every concrete path under ``root`` matching ``target`` modulo case.

    Args:
        target: Requested path; must start with ``root`` literally.
        root: Directory the search is confined to.
        lister: Directory-listing primitive, replaceable for testing.

    Returns:
        list[Path]: Matches in discovery order. Empty when nothing matches;
        more than one entry when case-colliding entries exist on disk.

    Raises:
        NotUnderRootError: If ``root`` is not a component prefix of ``target``.
        DirectoryReadError: If any directory on the search path cannot be
            listed. No partial result is returned.
    """

    root_raw = os.fsencode(root)
    target_raw = os.fsencode(target)
    remaining = strip_root(target_raw, root_raw)
    if remaining is None:
        raise NotUnderRootError(target_raw, root_raw)

    matches: list[Path] = []
    if not remaining:
        return matches

    queue: deque[_QueueItem] = deque([_QueueItem(prefix=(), remaining=remaining)])
    while queue:
        item = queue.popleft()
        head, tail = item.remaining[0], item.remaining[1:]
        if not head.is_normal:
            continue
        directory = os.path.join(root_raw, *item.prefix)
        for entry in _list(lister, directory or _CURRENT_DIRECTORY):
            if tail and not entry.is_dir:
                continue
            if not names_equal(entry.name, head.name):
                continue
            if tail:
                queue.append(_QueueItem(prefix=(*item.prefix, entry.name), remaining=tail))
            else:
                matches.append(Path(os.fsdecode(os.path.join(directory, entry.name))))

    if len(matches) > 1:
        LOGGER.debug("found %d case-insensitive matches for %r", len(matches), target)
    return matches


async def find_matching_files_async(
    target: Pathish,
    root: Pathish,
    *,
    lister: DirectoryLister = scan_directory,
) -> list[Path]:
    """Run :func:`find_matching_files` on a worker thread.

    Args:
        target: Requested path; must start with ``root`` literally.
        root: Directory the search is confined to.
        lister: Directory-listing primitive, replaceable for testing.

    Returns:
        list[Path]: Matches in discovery order.
    """

    return await asyncio.to_thread(find_matching_files, target, root, lister=lister)


__all__ = [
    "DirectoryLister",
    "ListedEntry",
    "find_matching_files",
    "find_matching_files_async",
    "scan_directory",
]

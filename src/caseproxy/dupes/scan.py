# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Enumerate a tree and group files whose paths differ only by case."""

from __future__ import annotations

import os
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..filesystem.insensitive import InsensitivePath


class ScanError(Exception):
    """Raised when the duplicate-finder root cannot be scanned."""


@dataclass(slots=True)
class DuplicateGroup:
    """Files that share one path modulo case.

    Attributes:
        key: Case-insensitive identity shared by every member.
        paths: Concrete member paths, sorted by their raw bytes.
    """

    key: InsensitivePath
    paths: list[Path] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.paths)


def find_all_files(root: Path) -> list[Path]:
    """Return every non-directory entry beneath ``root``, breadth first.

    Directory entries are recognised without following symbolic links.

    Args:
        root: Directory to walk.

    Returns:
        list[Path]: Files in discovery order.

    Raises:
        ScanError: If ``root`` is not a directory or a directory cannot be read.
    """

    if not root.is_dir():
        raise ScanError(f"given root path must be a directory: {root}")

    files: list[Path] = []
    queue: deque[Path] = deque([root])
    while queue:
        directory = queue.popleft()
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    path = directory / entry.name
                    if entry.is_dir(follow_symlinks=False):
                        queue.append(path)
                    else:
                        files.append(path)
        except OSError as exc:
            raise ScanError(f"cannot read directory {directory}: {exc.strerror or exc}") from exc
    return files


def group_case_duplicates(files: Iterable[Path]) -> list[DuplicateGroup]:
    """Group ``files`` by case-insensitive path, keeping groups of two or more.

    Args:
        files: Concrete file paths.

    Returns:
        list[DuplicateGroup]: Groups ordered by their case-insensitive key.
    """

    groups: dict[InsensitivePath, DuplicateGroup] = {}
    for path in files:
        key = InsensitivePath(path)
        group = groups.get(key)
        if group is None:
            groups[key] = DuplicateGroup(key=key, paths=[path])
        else:
            group.paths.append(path)

    duplicates = [group for group in groups.values() if len(group) > 1]
    for group in duplicates:
        group.paths.sort(key=os.fsencode)
    duplicates.sort(key=lambda group: group.key)
    return duplicates


__all__ = ["DuplicateGroup", "ScanError", "find_all_files", "group_case_duplicates"]

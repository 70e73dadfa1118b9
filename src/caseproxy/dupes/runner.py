# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Execution helpers for the case-duplicate finder."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..config import DupeFinderConfig
from .hashing import HASH_ERROR, hash_files
from .scan import DuplicateGroup, find_all_files, group_case_duplicates

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class DuplicateScan:
    """Capture the outcome of a duplicate scan."""

    root: Path
    scanned: int = 0
    groups: list[DuplicateGroup] = field(default_factory=list)
    hashes: dict[Path, str] = field(default_factory=dict)

    @property
    def unreadable(self) -> list[Path]:
        """Return members whose content could not be hashed.

        Returns:
            list[Path]: Paths recorded with the hashing error sentinel.
        """

        return [path for path, digest in self.hashes.items() if digest == HASH_ERROR]

    def __bool__(self) -> bool:
        """Return ``True`` when at least one duplicate group was found.

        Returns:
            bool: ``True`` if any group survived filtering.
        """

        return bool(self.groups)


def find_case_duplicates(config: DupeFinderConfig) -> DuplicateScan:
    """Scan ``config.root_dir`` for files whose paths differ only by case.

    Args:
        config: Duplicate-finder configuration.

    Returns:
        DuplicateScan: Groups of case-colliding files and their digests.

    Raises:
        ScanError: If the root cannot be scanned.
    """

    files = find_all_files(config.root_dir)
    groups = group_case_duplicates(files)
    LOGGER.debug("scanned %d files, %d duplicate groups", len(files), len(groups))
    members = [path for group in groups for path in group.paths]
    return DuplicateScan(
        root=config.root_dir,
        scanned=len(files),
        groups=groups,
        hashes=hash_files(members, chunk_size=config.chunk_size),
    )


__all__ = ["DuplicateScan", "find_case_duplicates"]

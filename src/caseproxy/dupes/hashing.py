# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Content hashing for duplicate-finder reports."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Final

from ..config import DEFAULT_HASH_CHUNK_SIZE
from ..filesystem.paths import display_path

LOGGER = logging.getLogger(__name__)

HASH_ERROR: Final[str] = "error"
HASH_MISSING: Final[str] = "missing"


def hash_file(path: Path, *, chunk_size: int = DEFAULT_HASH_CHUNK_SIZE) -> str:
    """Return the SHA3-256 digest of ``path`` as upper-case hex.

    Args:
        path: File to hash.
        chunk_size: Number of bytes read per iteration.

    Returns:
        str: Hex digest.

    Raises:
        OSError: If the file cannot be read.
    """

    hasher = hashlib.sha3_256()
    with path.open("rb") as handle:
        while chunk := handle.read(chunk_size):
            hasher.update(chunk)
    return hasher.hexdigest().upper()


def hash_files(
    paths: Iterable[Path],
    *,
    chunk_size: int = DEFAULT_HASH_CHUNK_SIZE,
) -> dict[Path, str]:
    """Hash every file in ``paths``, recording :data:`HASH_ERROR` on failure.

    Args:
        paths: Files to hash.
        chunk_size: Number of bytes read per iteration.

    Returns:
        dict[Path, str]: Digest, or the error sentinel, per path.
    """

    hashes: dict[Path, str] = {}
    for path in paths:
        try:
            hashes[path] = hash_file(path, chunk_size=chunk_size)
        except OSError as exc:
            LOGGER.warning("couldn't read %s for hashing: %s", display_path(path), exc)
            hashes[path] = HASH_ERROR
    return hashes


__all__ = ["HASH_ERROR", "HASH_MISSING", "hash_file", "hash_files"]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve file paths case-insensitively on case-sensitive filesystems."""

from __future__ import annotations

from .errors import DirectoryReadError, NotUnderRootError, ResolutionError
from .filesystem import InsensitivePath, compare_paths, is_within_root, resolve_parents
from .folding import compare_names, names_equal
from .resolver import find_matching_files, find_matching_files_async

__version__ = "0.1.0"

__all__ = [
    "DirectoryReadError",
    "InsensitivePath",
    "NotUnderRootError",
    "ResolutionError",
    "compare_names",
    "compare_paths",
    "find_matching_files",
    "find_matching_files_async",
    "is_within_root",
    "names_equal",
    "resolve_parents",
]

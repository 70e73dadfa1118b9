# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report files whose paths collide modulo letter case."""

from __future__ import annotations

from .hashing import HASH_ERROR, HASH_MISSING, hash_file, hash_files
from .report import render_html_report, render_text_report
from .runner import DuplicateScan, find_case_duplicates
from .scan import DuplicateGroup, ScanError, find_all_files, group_case_duplicates

__all__ = [
    "DuplicateGroup",
    "DuplicateScan",
    "HASH_ERROR",
    "HASH_MISSING",
    "ScanError",
    "find_all_files",
    "find_case_duplicates",
    "group_case_duplicates",
    "hash_file",
    "hash_files",
    "render_html_report",
    "render_text_report",
]

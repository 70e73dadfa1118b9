# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem utilities for case-insensitive path handling."""

from __future__ import annotations

from .components import Component, ComponentKind, join_components, split_components
from .insensitive import InsensitivePath, compare_components, compare_paths, fold_digest
from .paths import (
    display_path,
    display_relative_path,
    is_within_root,
    resolve_parents,
    strip_root,
)

__all__ = [
    "Component",
    "ComponentKind",
    "InsensitivePath",
    "compare_components",
    "compare_paths",
    "display_path",
    "display_relative_path",
    "fold_digest",
    "is_within_root",
    "join_components",
    "resolve_parents",
    "split_components",
    "strip_root",
]

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exceptions raised while resolving paths case-insensitively."""

from __future__ import annotations

from .filesystem.paths import display_path


class ResolutionError(Exception):
    """Base class for failures of a single resolution request."""


class NotUnderRootError(ResolutionError):
    """Raised when the requested path does not start with the root directory."""

    def __init__(self, target: bytes, root: bytes) -> None:
        """Record the offending ``target`` and the declared ``root``.

        Args:
            target: Requested path as OS-native bytes.
            root: Declared root directory as OS-native bytes.
        """

        super().__init__(f"{display_path(target)} is not under root {display_path(root)}")
        self.target = target
        self.root = root


class DirectoryReadError(ResolutionError):
    """Raised when listing a directory fails mid-resolution."""

    def __init__(self, directory: bytes, cause: OSError) -> None:
        """Record the directory that could not be listed.

        Args:
            directory: Directory path as OS-native bytes.
            cause: Underlying operating-system error.
        """

        reason = cause.strerror or str(cause)
        super().__init__(f"cannot read directory {display_path(directory)}: {reason}")
        self.directory = directory
        self.cause = cause


__all__ = ["DirectoryReadError", "NotUnderRootError", "ResolutionError"]

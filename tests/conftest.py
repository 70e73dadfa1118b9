# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pytest


@pytest.fixture
def case_sensitive_root(tmp_path: Path) -> Path:
    """Return ``tmp_path`` after checking it distinguishes names by case."""

    probe = tmp_path / ".probe"
    probe.write_text("lower", encoding="utf-8")
    colliding = tmp_path / ".PROBE"
    if colliding.exists():
        probe.unlink()
        pytest.skip("filesystem is case-insensitive")
    probe.unlink()
    return tmp_path


def make_files(root: Path, relative_paths: Iterable[str], *, content: str = "data") -> list[Path]:
    """Create every file in ``relative_paths`` beneath ``root``."""

    created: list[Path] = []
    for relative in relative_paths:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        created.append(path)
    return created


@pytest.fixture
def tree_factory(case_sensitive_root: Path):
    """Return a helper creating files beneath a case-sensitive root."""

    def _factory(*relative_paths: str, content: str = "data") -> list[Path]:
        return make_files(case_sensitive_root, relative_paths, content=content)

    return _factory

# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the breadth-first case-insensitive resolver."""

from __future__ import annotations

import asyncio
import errno
import os
from collections.abc import Iterable
from pathlib import Path

import pytest

from caseproxy.errors import DirectoryReadError, NotUnderRootError, ResolutionError
from caseproxy.resolver import (
    ListedEntry,
    find_matching_files,
    find_matching_files_async,
    scan_directory,
)


class FakeTree:
    """In-memory directory tree recording every listing request."""

    def __init__(self, listing: dict[bytes, list[ListedEntry]]) -> None:
        self.listing = listing
        self.calls: list[bytes] = []

    def __call__(self, directory: bytes) -> Iterable[ListedEntry]:
        self.calls.append(directory)
        try:
            return self.listing[directory]
        except KeyError:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory") from None


def _names(paths: list[Path], root: Path) -> set[str]:
    return {path.relative_to(root).as_posix() for path in paths}


def test_colliding_files_are_all_found(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory("abc.txt", "Abc.txt", "normal.txt")

    matches = find_matching_files(case_sensitive_root / "abc.txt", case_sensitive_root)

    assert _names(matches, case_sensitive_root) == {"abc.txt", "Abc.txt"}


def test_single_match_is_returned_with_on_disk_case(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory("abc.txt", "Abc.txt", "normal.txt")

    matches = find_matching_files(case_sensitive_root / "NORMAL.TXT", case_sensitive_root)

    assert matches == [case_sensitive_root / "normal.txt"]


def test_collisions_at_every_level_fan_out(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory(
        "dir/abc.txt",
        "dir/Abc.txt",
        "DIR/abc.txt",
        "DIR/ABC.TXT",
        "Dir/other.txt",
    )

    matches = find_matching_files(case_sensitive_root / "dir" / "abc.txt", case_sensitive_root)

    assert _names(matches, case_sensitive_root) == {
        "dir/abc.txt",
        "dir/Abc.txt",
        "DIR/abc.txt",
        "DIR/ABC.TXT",
    }


def test_missing_file_yields_empty_list(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory("present.txt")

    assert find_matching_files(case_sensitive_root / "absent.txt", case_sensitive_root) == []


def test_file_in_the_middle_of_a_path_is_not_descended(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory("name", "NAME/child")

    matches = find_matching_files(case_sensitive_root / "name" / "child", case_sensitive_root)

    assert matches == [case_sensitive_root / "NAME" / "child"]


def test_directory_can_match_the_final_component(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory("Sub/file.txt")

    matches = find_matching_files(case_sensitive_root / "sub", case_sensitive_root)

    assert matches == [case_sensitive_root / "Sub"]


def test_target_equal_to_root_has_no_matches(case_sensitive_root: Path) -> None:
    assert find_matching_files(case_sensitive_root, case_sensitive_root) == []


def test_target_outside_root_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(NotUnderRootError) as excinfo:
        find_matching_files("/elsewhere/file", tmp_path)

    assert "is not under root" in str(excinfo.value)
    assert isinstance(excinfo.value, ResolutionError)


def test_root_prefix_is_matched_literally(tmp_path: Path) -> None:
    root = tmp_path / "Root"
    with pytest.raises(NotUnderRootError):
        find_matching_files(tmp_path / "root" / "file", root)


def test_non_utf8_names_resolve(case_sensitive_root: Path) -> None:
    name = b"Caf\xe9.TXT"
    try:
        with open(os.path.join(os.fsencode(case_sensitive_root), name), "wb") as handle:
            handle.write(b"latin-1")
    except OSError:
        pytest.skip("filesystem rejects non-UTF-8 names")

    matches = find_matching_files(
        os.path.join(os.fsencode(case_sensitive_root), b"caf\xe9.txt"),
        case_sensitive_root,
    )

    assert [os.fsencode(match.name) for match in matches] == [name]


def test_fake_lister_reports_every_combination() -> None:
    tree = FakeTree(
        {
            b"/srv": [
                ListedEntry(b"Docs", True),
                ListedEntry(b"docs", True),
                ListedEntry(b"DOCS", False),
            ],
            b"/srv/Docs": [ListedEntry(b"Readme.md", False)],
            b"/srv/docs": [ListedEntry(b"README.md", False), ListedEntry(b"readme.MD", False)],
        }
    )

    matches = find_matching_files(b"/srv/docs/readme.md", b"/srv", lister=tree)

    assert matches == [
        Path("/srv/Docs/Readme.md"),
        Path("/srv/docs/README.md"),
        Path("/srv/docs/readme.MD"),
    ]
    assert tree.calls == [b"/srv", b"/srv/Docs", b"/srv/docs"]


def test_only_directories_on_the_path_are_listed() -> None:
    tree = FakeTree(
        {
            b"/srv": [ListedEntry(b"a", True), ListedEntry(b"b", True)],
            b"/srv/a": [ListedEntry(b"file", False)],
        }
    )

    find_matching_files(b"/srv/A/FILE", b"/srv", lister=tree)

    assert b"/srv/b" not in tree.calls


def test_unreadable_directory_aborts_the_search() -> None:
    def denied(directory: bytes) -> list[ListedEntry]:
        raise PermissionError(errno.EACCES, "Permission denied", os.fsdecode(directory))

    with pytest.raises(DirectoryReadError) as excinfo:
        find_matching_files(b"/srv/file", b"/srv", lister=denied)

    assert excinfo.value.directory == b"/srv"
    assert excinfo.value.cause.errno == errno.EACCES
    assert "cannot read directory /srv" in str(excinfo.value)


def test_relative_root_lists_current_directory() -> None:
    tree = FakeTree({b".": [ListedEntry(b"File", False)]})

    matches = find_matching_files(b"file", b"", lister=tree)

    assert matches == [Path("File")]
    assert tree.calls == [b"."]


def test_parent_markers_never_match() -> None:
    tree = FakeTree({b"/srv": [ListedEntry(b"x", True)]})

    assert find_matching_files(b"/srv/../x", b"/srv", lister=tree) == []
    assert tree.calls == []


def test_scan_directory_does_not_follow_symlinks(tmp_path: Path) -> None:
    (tmp_path / "real").mkdir()
    try:
        (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)
    except OSError:
        pytest.skip("symlinks are not supported here")

    entries = {entry.name: entry.is_dir for entry in scan_directory(os.fsencode(tmp_path))}

    assert entries == {b"real": True, b"link": False}


def test_async_wrapper_matches_sync_result(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory("Data/Item.txt")
    target = case_sensitive_root / "data" / "item.TXT"

    result = asyncio.run(find_matching_files_async(target, case_sensitive_root))

    assert result == find_matching_files(target, case_sensitive_root)
    assert result == [case_sensitive_root / "Data" / "Item.txt"]

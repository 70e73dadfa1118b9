# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for request-to-file planning."""

from __future__ import annotations

import errno
import logging
from http import HTTPStatus
from pathlib import Path

import pytest

from caseproxy.config import ServerConfig
from caseproxy.errors import NotUnderRootError
from caseproxy.resolver import ListedEntry
from caseproxy.server import handler
from caseproxy.server.handler import plan_response, request_relative_path


def _config(root: Path, **overrides: object) -> ServerConfig:
    return ServerConfig(root_path=root, port=0, **overrides)


@pytest.mark.parametrize(
    ("target", "prefix", "expected"),
    [
        ("/a/b.txt", "/", b"a/b.txt"),
        ("/files/a/b.txt?x=1", "/files", b"a/b.txt"),
        ("/files/../../etc/passwd", "/files/", b"etc/passwd"),
        ("/%41%62c", "/", b"Abc"),
        ("/caf%C3%A9", "/", "café".encode()),
        ("/other/a", "/files", None),
        ("/filesystem/a", "/files", None),
        ("//a/b.txt", "/", b"a/b.txt"),
        ("/a/b.txt#part", "/", b"a/b.txt"),
        ("http://example.test/a/b.txt?q=1", "/", b"a/b.txt"),
        ("/", "/", b""),
    ],
)
def test_request_relative_path(target: str, prefix: str, expected: bytes | None) -> None:
    assert request_relative_path(target, prefix) == expected


def test_existing_file_is_streamed(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory("Docs/Readme.md")

    plan = plan_response("/docs/README.MD", _config(case_sensitive_root))

    assert plan.is_success
    assert plan.file_path == case_sensitive_root / "Docs" / "Readme.md"
    assert plan.headers == {}


def test_missing_file_is_not_found(case_sensitive_root: Path) -> None:
    plan = plan_response("/nothing.txt", _config(case_sensitive_root))

    assert plan.status is HTTPStatus.NOT_FOUND
    assert not plan.is_success


def test_request_outside_prefix_is_not_found(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory("a.txt")

    plan = plan_response("/a.txt", _config(case_sensitive_root, url_prefix="/files"))

    assert plan.status is HTTPStatus.NOT_FOUND


def test_nul_byte_is_bad_request(case_sensitive_root: Path) -> None:
    plan = plan_response("/a%00b", _config(case_sensitive_root))

    assert plan.status is HTTPStatus.BAD_REQUEST


def test_empty_request_is_not_found(case_sensitive_root: Path) -> None:
    assert plan_response("/", _config(case_sensitive_root)).status is HTTPStatus.NOT_FOUND


def test_directory_is_not_served(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory("Sub/file.txt")

    assert plan_response("/sub", _config(case_sensitive_root)).status is HTTPStatus.NOT_FOUND


def test_parent_segments_cannot_escape(tmp_path: Path) -> None:
    root = tmp_path / "root"
    root.mkdir()
    (tmp_path / "secret.txt").write_text("secret", encoding="utf-8")

    plan = plan_response("/../secret.txt", _config(root))

    assert plan.status is HTTPStatus.NOT_FOUND


def test_first_match_wins_with_warning(
    tree_factory, case_sensitive_root: Path, caplog: pytest.LogCaptureFixture
) -> None:
    tree_factory("abc.txt", "ABC.txt")

    with caplog.at_level(logging.WARNING, logger="caseproxy"):
        plan = plan_response("/Abc.txt", _config(case_sensitive_root))

    assert plan.is_success
    assert plan.file_path is not None
    assert plan.file_path.name in {"abc.txt", "ABC.txt"}
    assert "2 files match" in caplog.text


def test_redirect_mode_emits_header(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory("Media/Some File.MP4")
    config = _config(
        case_sensitive_root,
        redirect_header="X-Accel-Redirect",
        redirect_prefix="/internal/",
    )

    plan = plan_response("/media/some%20file.mp4", config)

    assert plan.is_success
    assert plan.file_path is None
    assert plan.headers == {"X-Accel-Redirect": "/internal/Media/Some%20File.MP4"}


def test_unreadable_directory_is_forbidden(case_sensitive_root: Path) -> None:
    def denied(directory: bytes) -> list[ListedEntry]:
        raise PermissionError(errno.EACCES, "Permission denied")

    plan = plan_response("/a.txt", _config(case_sensitive_root), lister=denied)

    assert plan.status is HTTPStatus.FORBIDDEN


def test_unexpected_listing_error_is_internal(case_sensitive_root: Path) -> None:
    def broken(directory: bytes) -> list[ListedEntry]:
        raise OSError(errno.EIO, "Input/output error")

    plan = plan_response("/a.txt", _config(case_sensitive_root), lister=broken)

    assert plan.status is HTTPStatus.INTERNAL_SERVER_ERROR


def test_root_mismatch_is_forbidden(case_sensitive_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def not_under_root(target: bytes, root: bytes, **_: object) -> list[Path]:
        raise NotUnderRootError(target, root)

    monkeypatch.setattr(handler, "find_matching_files", not_under_root)

    plan = plan_response("/a.txt", _config(case_sensitive_root))

    assert plan.status is HTTPStatus.FORBIDDEN


def test_match_outside_root_is_forbidden(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = tmp_path / "root"
    root.mkdir()
    outside = tmp_path / "outside.txt"
    outside.write_text("x", encoding="utf-8")
    monkeypatch.setattr(handler, "find_matching_files", lambda *_args, **_kwargs: [outside])

    plan = plan_response("/outside.txt", _config(root))

    assert plan.status is HTTPStatus.FORBIDDEN


def test_leading_double_slash_keeps_first_directory(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory("Docs/Readme.md", "readme.md")

    plan = plan_response("//docs/readme.md", _config(case_sensitive_root))

    assert plan.is_success
    assert plan.file_path == case_sensitive_root / "Docs" / "Readme.md"


def test_trailing_separator_does_not_serve_a_file(tree_factory, case_sensitive_root: Path) -> None:
    tree_factory("a.txt")

    plan = plan_response("/A.TXT/", _config(case_sensitive_root))

    assert plan.status is HTTPStatus.NOT_FOUND
    assert plan.file_path is None


def test_error_reasons_do_not_reveal_the_root(
    case_sensitive_root: Path, caplog: pytest.LogCaptureFixture
) -> None:
    def denied(directory: bytes) -> list[ListedEntry]:
        raise PermissionError(errno.EACCES, "Permission denied")

    with caplog.at_level(logging.WARNING, logger="caseproxy"):
        plan = plan_response("/sub/a.txt", _config(case_sensitive_root), lister=denied)

    assert plan.status is HTTPStatus.FORBIDDEN
    assert plan.reason == "cannot read directory /"
    assert str(case_sensitive_root) not in plan.reason
    assert str(case_sensitive_root) in caplog.text


def test_root_mismatch_reason_is_generic(case_sensitive_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def not_under_root(target: bytes, root: bytes, **_: object) -> list[Path]:
        raise NotUnderRootError(target, root)

    monkeypatch.setattr(handler, "find_matching_files", not_under_root)

    plan = plan_response("/a.txt", _config(case_sensitive_root))

    assert plan.reason == "path is outside the served root"

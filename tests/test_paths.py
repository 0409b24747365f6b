"""Tests for path resolution."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from filefuncs.errors import InvalidPathError
from filefuncs.paths import PathKind, PathResolver


def test_relative_path_anchored_to_base_dir(tmp_path: Path):
    resolver = PathResolver(tmp_path)
    assert resolver.to_path("docs/a.txt") == tmp_path / "docs" / "a.txt"


def test_absolute_path_kept(tmp_path: Path):
    resolver = PathResolver(tmp_path / "elsewhere")
    target = tmp_path / "x.txt"
    assert resolver.to_path(str(target)) == target


def test_default_base_dir_is_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    resolver = PathResolver()
    assert resolver.to_path("a.txt") == Path(os.getcwd()) / "a.txt"


def test_dot_dot_segments_collapsed(tmp_path: Path):
    resolver = PathResolver(tmp_path / "sub")
    assert resolver.to_path("../other/./file.txt") == tmp_path / "other" / "file.txt"


@pytest.mark.parametrize("raw", ["", "   "])
def test_empty_path_rejected(raw: str):
    with pytest.raises(InvalidPathError):
        PathResolver().resolve(raw)


def test_nul_character_rejected():
    with pytest.raises(InvalidPathError):
        PathResolver().resolve("bad\0name")


def test_file_uri_accepted(tmp_path: Path):
    (tmp_path / "a b.txt").write_text("x")
    resolved = PathResolver().resolve((tmp_path / "a b.txt").as_uri())
    assert resolved.path == tmp_path / "a b.txt"
    assert resolved.is_file


def test_remote_file_uri_rejected():
    with pytest.raises(InvalidPathError):
        PathResolver().resolve("file://example.com/share/a.txt")


def test_resolve_classifies_kind(tmp_path: Path):
    (tmp_path / "f.txt").write_text("x")
    (tmp_path / "d").mkdir()
    resolver = PathResolver(tmp_path)

    f = resolver.resolve("f.txt")
    assert f.kind is PathKind.FILE
    assert f.exists and f.is_file and not f.is_dir

    d = resolver.resolve("d")
    assert d.kind is PathKind.DIRECTORY
    assert d.is_dir

    missing = resolver.resolve("missing")
    assert missing.kind is PathKind.ABSENT
    assert not missing.exists


def test_resolved_path_name_and_parent(tmp_path: Path):
    resolved = PathResolver(tmp_path).resolve("sub/name.txt")
    assert resolved.name == "name.txt"
    assert resolved.parent == tmp_path / "sub"
    assert str(resolved) == str(tmp_path / "sub" / "name.txt")

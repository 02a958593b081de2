"""Tests for rti.platform.files module."""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from rti.platform.files import atomic_write_text, empty_dir, make_executable, move_entry, remove_path


class TestAtomicWriteText:
    def test_writes_content(self, tmp_path: Path) -> None:
        path = tmp_path / "sub" / "marker"
        atomic_write_text(path, "v24.12.0")
        assert path.read_text(encoding="utf-8") == "v24.12.0"

    def test_replaces_and_leaves_no_temp(self, tmp_path: Path) -> None:
        path = tmp_path / "marker"
        path.write_text("old", encoding="utf-8")
        atomic_write_text(path, "new")
        assert path.read_text(encoding="utf-8") == "new"
        assert [p.name for p in tmp_path.iterdir()] == ["marker"]


class TestRemoveAndEmpty:
    def test_remove_file_and_dir(self, tmp_path: Path) -> None:
        (tmp_path / "f").write_text("x")
        (tmp_path / "d" / "e").mkdir(parents=True)
        remove_path(tmp_path / "f")
        remove_path(tmp_path / "d")
        remove_path(tmp_path / "missing")
        assert list(tmp_path.iterdir()) == []

    def test_empty_dir(self, tmp_path: Path) -> None:
        target = tmp_path / "target"
        (target / "bin").mkdir(parents=True)
        (target / "old.txt").write_text("x")
        empty_dir(target)
        assert target.is_dir()
        assert list(target.iterdir()) == []

    def test_empty_dir_creates(self, tmp_path: Path) -> None:
        empty_dir(tmp_path / "new")
        assert (tmp_path / "new").is_dir()


def test_move_entry_overwrites(tmp_path: Path) -> None:
    src = tmp_path / "src"
    dest = tmp_path / "out" / "dest"
    src.write_text("new")
    dest.parent.mkdir()
    dest.write_text("old")

    move_entry(src, dest)

    assert dest.read_text() == "new"
    assert not src.exists()


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
def test_make_executable(tmp_path: Path) -> None:
    path = tmp_path / "tool"
    path.write_text("#!/bin/sh\n")
    path.chmod(0o600)

    make_executable(path)

    assert stat.S_IMODE(path.stat().st_mode) == 0o755

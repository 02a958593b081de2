"""Tests for rti.install.layout module."""

from __future__ import annotations

from pathlib import Path

from rti.core.errors import ErrorKind
from rti.core.result import Err, Ok
from rti.install.layout import (
    find_in_subdirs,
    first_subdir,
    missing_executable,
    move_children,
    move_file,
)


def test_first_subdir_is_name_ordered(tmp_path: Path) -> None:
    (tmp_path / "b").mkdir()
    (tmp_path / "a").mkdir()
    (tmp_path / "0-file").write_text("x")
    assert first_subdir(tmp_path) == tmp_path / "a"


def test_first_subdir_none(tmp_path: Path) -> None:
    (tmp_path / "file").write_text("x")
    assert first_subdir(tmp_path) is None


def test_find_in_subdirs(tmp_path: Path) -> None:
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "rg").write_text("x")
    assert find_in_subdirs(tmp_path, "rg") == tmp_path / "b" / "rg"
    assert find_in_subdirs(tmp_path, "uv") is None


def test_move_children(tmp_path: Path) -> None:
    src = tmp_path / "src"
    (src / "bin").mkdir(parents=True)
    (src / "bin" / "node").write_text("x")
    (src / "LICENSE").write_text("y")
    dest = tmp_path / "dest"

    assert move_children(src, dest) == Ok(2)
    assert (dest / "bin" / "node").exists()
    assert list(src.iterdir()) == []


def test_move_file_missing_source(tmp_path: Path) -> None:
    result = move_file(tmp_path / "nope", tmp_path / "dest")
    assert isinstance(result, Err)
    assert result.error.kind == ErrorKind.IO_FAILURE


def test_missing_executable() -> None:
    result = missing_executable("uv", Path("/scratch"))
    assert result.error.kind == ErrorKind.EXECUTABLE_NOT_FOUND
    assert "uv" in result.error.message

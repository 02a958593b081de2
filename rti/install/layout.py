"""Helpers for rearranging extracted archives into a flat install root."""

from __future__ import annotations

from pathlib import Path

from rti.core.errors import ErrorKind, InjectError
from rti.core.result import Err, Ok, Result
from rti.platform.files import move_entry

__all__ = [
    "first_subdir",
    "find_in_subdirs",
    "move_children",
    "move_file",
    "missing_executable",
]


def _sorted_entries(directory: Path) -> list[Path]:
    return sorted(directory.iterdir(), key=lambda p: p.name)


def first_subdir(directory: Path) -> Path | None:
    """First subdirectory of ``directory`` in name order, or None."""
    for entry in _sorted_entries(directory):
        if entry.is_dir():
            return entry
    return None


def find_in_subdirs(directory: Path, name: str) -> Path | None:
    """Find ``name`` directly inside any first-level subdirectory."""
    for entry in _sorted_entries(directory):
        candidate = entry / name
        if entry.is_dir() and candidate.is_file():
            return candidate
    return None


def move_children(src_dir: Path, dest_dir: Path) -> Result[int, InjectError]:
    """Move every entry of ``src_dir`` into ``dest_dir``, overwriting."""
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        count = 0
        for entry in _sorted_entries(src_dir):
            move_entry(entry, dest_dir / entry.name)
            count += 1
        return Ok(count)
    except OSError as e:
        return Err(
            InjectError(kind=ErrorKind.IO_FAILURE, message=f"Cannot move {src_dir}: {e}")
        )


def move_file(src: Path, dest: Path) -> Result[None, InjectError]:
    try:
        move_entry(src, dest)
        return Ok(None)
    except OSError as e:
        return Err(InjectError(kind=ErrorKind.IO_FAILURE, message=f"Cannot move {src}: {e}"))


def missing_executable(name: str, searched: Path) -> Err[InjectError]:
    return Err(
        InjectError(
            kind=ErrorKind.EXECUTABLE_NOT_FOUND,
            message=f"{name} not found in extracted archive {searched}",
            hint="The upstream archive layout may have changed",
        )
    )

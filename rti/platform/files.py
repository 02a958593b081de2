"""Filesystem helpers used while laying out an installation."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

__all__ = [
    "atomic_write_text",
    "empty_dir",
    "move_entry",
    "remove_path",
    "make_executable",
]

EXECUTABLE_MODE = 0o755


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path atomically using temp file + replace."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree. Missing paths are ignored."""
    if path.is_symlink() or path.is_file():
        path.unlink(missing_ok=True)
    elif path.is_dir():
        shutil.rmtree(path)


def empty_dir(path: Path) -> None:
    """Ensure ``path`` exists and contains nothing."""
    path.mkdir(parents=True, exist_ok=True)
    for entry in path.iterdir():
        remove_path(entry)


def move_entry(src: Path, dest: Path) -> None:
    """Move ``src`` to ``dest``, replacing whatever is at ``dest``."""
    if dest.exists() or dest.is_symlink():
        remove_path(dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(src), str(dest))


def make_executable(path: Path) -> None:
    """Set ``rwxr-xr-x`` on ``path``."""
    path.chmod(EXECUTABLE_MODE)

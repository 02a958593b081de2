"""Install marker - which version is present in a target directory.

The marker is a plain-text file named ``{kind}_{os}_{arch}`` inside the target
directory holding the installed version. It is written atomically and only
after a fully successful install.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rti.platform.detection import PlatformSpec
from rti.platform.files import atomic_write_text

if TYPE_CHECKING:
    from rti.runtimes.base import RuntimeKind

__all__ = ["marker_name", "marker_path", "read_marker", "write_marker", "remove_marker"]


def marker_name(kind: RuntimeKind, platform: PlatformSpec) -> str:
    return f"{kind}_{platform.os}_{platform.arch}"


def marker_path(target_dir: Path, kind: RuntimeKind, platform: PlatformSpec) -> Path:
    return target_dir / marker_name(kind, platform)


def read_marker(target_dir: Path, kind: RuntimeKind, platform: PlatformSpec) -> str | None:
    """Get the recorded version, or None if there is no readable marker."""
    path = marker_path(target_dir, kind, platform)
    try:
        return path.read_text(encoding="utf-8").strip()
    except (FileNotFoundError, IsADirectoryError, UnicodeDecodeError):
        return None


def write_marker(target_dir: Path, kind: RuntimeKind, platform: PlatformSpec, version: str) -> Path:
    path = marker_path(target_dir, kind, platform)
    atomic_write_text(path, version)
    return path


def remove_marker(target_dir: Path, kind: RuntimeKind, platform: PlatformSpec) -> None:
    path = marker_path(target_dir, kind, platform)
    if path.is_file():
        path.unlink()

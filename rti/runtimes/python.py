"""Python runtime definition (standalone builds).

Relocatable CPython builds from python-build-standalone. Releases are tagged
by build date, so versions here are composite: ``<semver>+<releaseDate>``
(e.g. ``3.12.12+20251014``). A bare semver uses DEFAULT_RELEASE_DATE.

The ``install_only`` archives always extract to a ``python/`` directory.

GitHub: https://github.com/astral-sh/python-build-standalone
"""

from __future__ import annotations

from pathlib import Path

from rti.core.errors import InjectError
from rti.core.result import Err, Ok, Result
from rti.install.layout import missing_executable, move_children
from rti.platform.detection import PlatformSpec
from rti.runtimes.base import (
    ArchiveFormat,
    Runtime,
    RuntimeKind,
    RuntimeSpec,
    unsupported_platform,
)

__all__ = ["PythonRuntime", "DEFAULT_RELEASE_DATE", "split_version"]

DEFAULT_RELEASE_DATE = "20251014"


def split_version(version: str) -> tuple[str, str]:
    """Split ``3.12.12+20251014`` into ``("3.12.12", "20251014")``.

    Splits on the first ``+``; a missing or empty date uses DEFAULT_RELEASE_DATE.
    """
    semver, _, release_date = version.partition("+")
    return semver, release_date or DEFAULT_RELEASE_DATE


class PythonRuntime(Runtime):
    """CPython standalone builds."""

    spec = RuntimeSpec(
        kind=RuntimeKind.PYTHON,
        name="Python",
        default_version=f"3.12.12+{DEFAULT_RELEASE_DATE}",
        executable="python3",
        homepage="https://github.com/astral-sh/python-build-standalone",
    )
    repo = "astral-sh/python-build-standalone"
    matrix = (
        ("win32", "x64"),
        ("win32", "arm64"),
        ("darwin", "x64"),
        ("darwin", "arm64"),
        ("linux", "x64"),
        ("linux", "arm64"),
    )

    def platform_token(self, platform: PlatformSpec) -> Result[str, InjectError]:
        """Target triple; only x64/arm64 are published for Windows and Linux."""
        arch = platform.arch
        match (platform.os, arch):
            case ("darwin", "arm64"):
                return Ok("aarch64-apple-darwin")
            case ("darwin", _):
                return Ok("x86_64-apple-darwin")
            case ("linux", "x64"):
                return Ok("x86_64-unknown-linux-gnu")
            case ("linux", "arm64"):
                return Ok("aarch64-unknown-linux-gnu")
            case ("win32", "x64"):
                return Ok("x86_64-pc-windows-msvc")
            case ("win32", "arm64"):
                return Ok("aarch64-pc-windows-msvc")
            case _:
                return unsupported_platform(self.kind, platform)

    def archive_format(self, platform: PlatformSpec) -> Result[ArchiveFormat, InjectError]:
        return Ok(ArchiveFormat.TAR_GZ)

    def download_url(self, version: str, platform: PlatformSpec) -> Result[str, InjectError]:
        token = self.platform_token(platform)
        if isinstance(token, Err):
            return token
        semver, release_date = split_version(version)
        return Ok(
            f"https://github.com/{self.repo}/releases/download/{release_date}/"
            f"cpython-{semver}+{release_date}-{token.value}-install_only.tar.gz"
        )

    def executable_path(self, target_dir: Path, platform: PlatformSpec) -> Path:
        """python.exe at the root on Windows, bin/python3 elsewhere."""
        if platform.is_windows:
            return target_dir / "python.exe"
        return target_dir / "bin" / "python3"

    def executables(self, target_dir: Path, platform: PlatformSpec) -> list[Path]:
        bin_dir = target_dir / "bin"
        if not bin_dir.is_dir():
            return [self.executable_path(target_dir, platform)]
        return sorted(p for p in bin_dir.iterdir() if p.is_file() and not p.is_symlink())

    def normalize(
        self,
        extracted_dir: Path,
        target_dir: Path,
        version: str,
        platform: PlatformSpec,
    ) -> Result[None, InjectError]:
        """Move the contents of python/ up into target_dir."""
        nested = extracted_dir / "python"
        if not nested.is_dir():
            return missing_executable("python/", extracted_dir)
        moved = move_children(nested, target_dir)
        if isinstance(moved, Err):
            return moved
        return Ok(None)

    def version_matches(self, output: str, version: str) -> bool:
        """``python3 --version`` prints ``Python 3.12.12``; the date is not shown."""
        semver, _ = split_version(version)
        return semver in output

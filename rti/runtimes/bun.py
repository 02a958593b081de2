"""Bun runtime definition.

Bun is a JavaScript runtime, bundler, and package manager shipped as a
single executable.

Bun uses GitHub releases with ``bun-v1.x.x`` tags. Assets use ``aarch64``
rather than ``arm64`` and a ``windows-`` prefix rather than ``win-``:
- Linux x64: bun-linux-x64.zip (MUSL: bun-linux-x64-musl.zip)
- Linux ARM64: bun-linux-aarch64.zip (MUSL: bun-linux-aarch64-musl.zip)
- macOS x64: bun-darwin-x64.zip
- macOS ARM64: bun-darwin-aarch64.zip
- Windows x64: bun-windows-x64.zip

GitHub: https://github.com/oven-sh/bun
"""

from __future__ import annotations

from pathlib import Path

from rti.core.errors import InjectError
from rti.core.result import Err, Ok, Result
from rti.install.layout import missing_executable, move_file
from rti.platform.detection import MUSL_SUFFIX, PlatformSpec
from rti.runtimes.base import (
    ArchiveFormat,
    Runtime,
    RuntimeKind,
    RuntimeSpec,
    unsupported_platform,
)

__all__ = ["BunRuntime"]


class BunRuntime(Runtime):
    """Bun JavaScript runtime."""

    spec = RuntimeSpec(
        kind=RuntimeKind.BUN,
        name="Bun",
        default_version="v1.3.5",
        executable="bun",
        homepage="https://bun.sh",
    )
    repo = "oven-sh/bun"
    matrix = (
        ("win32", "x64"),
        ("win32", "arm64"),
        ("darwin", "x64"),
        ("darwin", "arm64"),
        ("linux", "x64"),
        ("linux", "arm64"),
        ("linux", "x64-musl"),
        ("linux", "arm64-musl"),
    )

    def platform_token(self, platform: PlatformSpec) -> Result[str, InjectError]:
        cpu = "aarch64" if platform.base_arch == "arm64" else "x64"
        match platform.os:
            case "darwin":
                return Ok(f"darwin-{cpu}")
            case "linux":
                suffix = MUSL_SUFFIX if platform.is_musl else ""
                return Ok(f"linux-{cpu}{suffix}")
            case "win32":
                return Ok(f"windows-{cpu}")
            case _:
                return unsupported_platform(self.kind, platform)

    def archive_format(self, platform: PlatformSpec) -> Result[ArchiveFormat, InjectError]:
        # Bun publishes zip archives only, on every platform.
        return Ok(ArchiveFormat.ZIP)

    def download_url(self, version: str, platform: PlatformSpec) -> Result[str, InjectError]:
        token = self.platform_token(platform)
        if isinstance(token, Err):
            return token
        tag = f"bun-v{version.removeprefix('v')}"
        return Ok(f"https://github.com/{self.repo}/releases/download/{tag}/bun-{token.value}.zip")

    def normalize(
        self,
        extracted_dir: Path,
        target_dir: Path,
        version: str,
        platform: PlatformSpec,
    ) -> Result[None, InjectError]:
        """Take the executable from bun-{token}/ if present, else from the root."""
        token = self.platform_token(platform)
        if isinstance(token, Err):
            return token
        exe = platform.exe_name(self.spec.executable)
        candidates = (extracted_dir / f"bun-{token.value}" / exe, extracted_dir / exe)
        for candidate in candidates:
            if candidate.is_file():
                return move_file(candidate, target_dir / exe)
        return missing_executable(exe, extracted_dir)

    def version_matches(self, output: str, version: str) -> bool:
        """``bun --version`` prints the version without a leading ``v``."""
        return version.removeprefix("v") in output

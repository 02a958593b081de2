"""Node.js runtime definition.

Official builds from nodejs.org. Archives contain a single root directory
named ``node-{version}-{token}`` holding ``bin/``, ``lib/``, ``include/``,
``share/`` (or ``node.exe`` and friends on Windows).

Downloads: https://nodejs.org/dist/
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

__all__ = ["NodeRuntime"]


class NodeRuntime(Runtime):
    """Node.js from nodejs.org/dist."""

    spec = RuntimeSpec(
        kind=RuntimeKind.NODE,
        name="Node.js",
        default_version="v24.12.0",
        executable="node",
        homepage="https://nodejs.org",
        version_args=("-v",),
        supports_cleanup=True,
    )
    matrix = (
        ("win32", "x64"),
        ("win32", "arm64"),
        ("win32", "x86"),
        ("darwin", "x64"),
        ("darwin", "arm64"),
        ("linux", "x64"),
        ("linux", "arm64"),
        ("linux", "armv7l"),
        ("linux", "ppc64le"),
        ("linux", "s390x"),
    )

    def platform_token(self, platform: PlatformSpec) -> Result[str, InjectError]:
        """Node platform tokens.

        - darwin: darwin-arm64 / darwin-x64
        - linux: linux-arm64, linux-armv7l (arm, armv7l), linux-ppc64le
          (ppc64, ppc64le), linux-s390x (s390, s390x), else linux-x64
        - win32: win-arm64, win-x86 (ia32, x86), else win-x64
        """
        arch = platform.base_arch
        match platform.os:
            case "darwin":
                return Ok("darwin-arm64" if arch == "arm64" else "darwin-x64")
            case "linux":
                match arch:
                    case "arm64":
                        return Ok("linux-arm64")
                    case "arm" | "armv7l":
                        return Ok("linux-armv7l")
                    case "ppc64" | "ppc64le":
                        return Ok("linux-ppc64le")
                    case "s390" | "s390x":
                        return Ok("linux-s390x")
                    case _:
                        return Ok("linux-x64")
            case "win32":
                match arch:
                    case "arm64":
                        return Ok("win-arm64")
                    case "ia32" | "x86":
                        return Ok("win-x86")
                    case _:
                        return Ok("win-x64")
            case _:
                return unsupported_platform(self.kind, platform)

    def archive_format(self, platform: PlatformSpec) -> Result[ArchiveFormat, InjectError]:
        return Ok(ArchiveFormat.ZIP if platform.is_windows else ArchiveFormat.TAR_GZ)

    def download_url(self, version: str, platform: PlatformSpec) -> Result[str, InjectError]:
        token = self.platform_token(platform)
        if isinstance(token, Err):
            return token
        fmt = self.archive_format(platform)
        if isinstance(fmt, Err):
            return fmt
        return Ok(f"https://nodejs.org/dist/{version}/node-{version}-{token.value}.{fmt.value}")

    def executable_path(self, target_dir: Path, platform: PlatformSpec) -> Path:
        """node.exe at the root on Windows, bin/node elsewhere."""
        if platform.is_windows:
            return target_dir / "node.exe"
        return target_dir / "bin" / "node"

    def executables(self, target_dir: Path, platform: PlatformSpec) -> list[Path]:
        """Every regular file in bin/ (node, npm, npx, corepack)."""
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
        """Move everything inside node-{version}-{token}/ up into target_dir."""
        token = self.platform_token(platform)
        if isinstance(token, Err):
            return token
        nested = extracted_dir / f"node-{version}-{token.value}"
        if not nested.is_dir():
            return missing_executable(nested.name, extracted_dir)
        moved = move_children(nested, target_dir)
        if isinstance(moved, Err):
            return moved
        return Ok(None)

    def version_matches(self, output: str, version: str) -> bool:
        """``node -v`` prints exactly the tag, e.g. ``v24.12.0``."""
        return output.strip() == version

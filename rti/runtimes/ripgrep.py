"""ripgrep runtime definition.

ripgrep publishes a small, fixed set of prebuilt archives. Anything outside
the table below is unsupported; there is no fallback.

GitHub: https://github.com/BurntSushi/ripgrep
"""

from __future__ import annotations

from pathlib import Path

from rti.core.errors import InjectError
from rti.core.result import Err, Ok, Result
from rti.install.layout import find_in_subdirs, missing_executable, move_file
from rti.platform.detection import PlatformSpec
from rti.runtimes.base import (
    ArchiveFormat,
    Runtime,
    RuntimeKind,
    RuntimeSpec,
    unsupported_platform,
)

__all__ = ["RipgrepRuntime", "RIPGREP_TARGETS"]

# "{arch}-{os}" -> (target triple, archive format)
RIPGREP_TARGETS: dict[str, tuple[str, ArchiveFormat]] = {
    "x64-linux": ("x86_64-unknown-linux-musl", ArchiveFormat.TAR_GZ),
    "arm64-linux": ("aarch64-unknown-linux-gnu", ArchiveFormat.TAR_GZ),
    "x64-darwin": ("x86_64-apple-darwin", ArchiveFormat.TAR_GZ),
    "arm64-darwin": ("aarch64-apple-darwin", ArchiveFormat.TAR_GZ),
    "x64-win32": ("x86_64-pc-windows-msvc", ArchiveFormat.ZIP),
    "arm64-win32": ("aarch64-pc-windows-msvc", ArchiveFormat.ZIP),
}


class RipgrepRuntime(Runtime):
    """ripgrep (rg) from BurntSushi/ripgrep GitHub releases."""

    spec = RuntimeSpec(
        kind=RuntimeKind.RIPGREP,
        name="ripgrep",
        default_version="14.1.1",
        executable="rg",
        homepage="https://github.com/BurntSushi/ripgrep",
    )
    repo = "BurntSushi/ripgrep"
    matrix = tuple(
        (key.split("-", 1)[1], key.split("-", 1)[0]) for key in RIPGREP_TARGETS
    )

    def _target(self, platform: PlatformSpec) -> Result[tuple[str, ArchiveFormat], InjectError]:
        target = RIPGREP_TARGETS.get(f"{platform.arch}-{platform.os}")
        if target is None:
            return unsupported_platform(self.kind, platform)
        return Ok(target)

    def platform_token(self, platform: PlatformSpec) -> Result[str, InjectError]:
        return self._target(platform).map(lambda t: t[0])

    def archive_format(self, platform: PlatformSpec) -> Result[ArchiveFormat, InjectError]:
        return self._target(platform).map(lambda t: t[1])

    def download_url(self, version: str, platform: PlatformSpec) -> Result[str, InjectError]:
        target = self._target(platform)
        if isinstance(target, Err):
            return target
        triple, fmt = target.value
        return Ok(
            f"https://github.com/{self.repo}/releases/download/{version}/"
            f"ripgrep-{version}-{triple}.{fmt.value}"
        )

    def normalize(
        self,
        extracted_dir: Path,
        target_dir: Path,
        version: str,
        platform: PlatformSpec,
    ) -> Result[None, InjectError]:
        """Find rg at the scratch root, else in any first-level subdirectory."""
        exe = platform.exe_name(self.spec.executable)
        found = extracted_dir / exe
        if not found.is_file():
            nested = find_in_subdirs(extracted_dir, exe)
            if nested is None:
                return missing_executable(exe, extracted_dir)
            found = nested
        return move_file(found, target_dir / exe)

    def version_matches(self, output: str, version: str) -> bool:
        """``rg --version`` prints e.g. ``ripgrep 14.1.1 (rev ...)``."""
        return version in output

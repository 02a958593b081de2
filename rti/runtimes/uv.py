"""uv runtime definition.

uv is a Python package and project manager. Releases ship ``uv`` and
``uvx`` executables in archives named after Rust target triples.

Linux has parallel GNU and MUSL builds; a ``-musl`` suffix on the
requested architecture (``x64-musl``, ``arm64-musl`` ...) selects MUSL.

GitHub: https://github.com/astral-sh/uv
"""

from __future__ import annotations

from pathlib import Path

from rti.core.errors import InjectError
from rti.core.result import Err, Ok, Result
from rti.install.layout import first_subdir, missing_executable, move_file
from rti.platform.detection import PlatformSpec
from rti.runtimes.base import (
    ArchiveFormat,
    Runtime,
    RuntimeKind,
    RuntimeSpec,
    unsupported_platform,
)

__all__ = ["UvRuntime", "LINUX_FALLBACK_TRIPLE"]

LINUX_FALLBACK_TRIPLE = "x86_64-unknown-linux-gnu"

_LINUX_GNU: dict[str, str] = {
    "x64": "x86_64-unknown-linux-gnu",
    "arm64": "aarch64-unknown-linux-gnu",
    "arm": "armv7-unknown-linux-gnueabihf",
    "armv7l": "armv7-unknown-linux-gnueabihf",
    "ia32": "i686-unknown-linux-gnu",
    "x86": "i686-unknown-linux-gnu",
    "ppc64": "powerpc64-unknown-linux-gnu",
    "ppc64le": "powerpc64le-unknown-linux-gnu",
    "s390x": "s390x-unknown-linux-gnu",
    "riscv64": "riscv64gc-unknown-linux-gnu",
}

_LINUX_MUSL: dict[str, str] = {
    "x64": "x86_64-unknown-linux-musl",
    "arm64": "aarch64-unknown-linux-musl",
    "arm": "armv7-unknown-linux-musleabihf",
    "armv7l": "armv7-unknown-linux-musleabihf",
    "ia32": "i686-unknown-linux-musl",
    "x86": "i686-unknown-linux-musl",
}


class UvRuntime(Runtime):
    """uv and uvx from astral-sh/uv GitHub releases."""

    spec = RuntimeSpec(
        kind=RuntimeKind.UV,
        name="uv",
        default_version="0.9.18",
        executable="uv",
        homepage="https://docs.astral.sh/uv/",
    )
    repo = "astral-sh/uv"
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

    def _linux_triple(self, platform: PlatformSpec) -> str | None:
        table = _LINUX_MUSL if platform.is_musl else _LINUX_GNU
        return table.get(platform.base_arch)

    def platform_token(self, platform: PlatformSpec) -> Result[str, InjectError]:
        """Rust target triple for ``platform``.

        Unrecognized Linux architectures fall back to the generic x86_64 GNU
        triple instead of failing; see platform_warning().
        """
        arch = platform.base_arch
        match platform.os:
            case "darwin":
                return Ok("aarch64-apple-darwin" if arch == "arm64" else "x86_64-apple-darwin")
            case "linux":
                return Ok(self._linux_triple(platform) or LINUX_FALLBACK_TRIPLE)
            case "win32":
                match arch:
                    case "arm64":
                        return Ok("aarch64-pc-windows-msvc")
                    case "ia32" | "x86":
                        return Ok("i686-pc-windows-msvc")
                    case _:
                        return Ok("x86_64-pc-windows-msvc")
            case _:
                return unsupported_platform(self.kind, platform)

    def platform_warning(self, platform: PlatformSpec) -> str | None:
        if platform.is_linux and self._linux_triple(platform) is None:
            return (
                f"uv has no known build for linux-{platform.arch}; "
                f"falling back to {LINUX_FALLBACK_TRIPLE}"
            )
        return None

    def archive_format(self, platform: PlatformSpec) -> Result[ArchiveFormat, InjectError]:
        return Ok(ArchiveFormat.ZIP if platform.is_windows else ArchiveFormat.TAR_GZ)

    def download_url(self, version: str, platform: PlatformSpec) -> Result[str, InjectError]:
        token = self.platform_token(platform)
        if isinstance(token, Err):
            return token
        fmt = self.archive_format(platform)
        if isinstance(fmt, Err):
            return fmt
        return Ok(
            f"https://github.com/{self.repo}/releases/download/{version}/"
            f"uv-{token.value}.{fmt.value}"
        )

    def companion_path(self, target_dir: Path, platform: PlatformSpec) -> Path:
        return target_dir / platform.exe_name("uvx")

    def executables(self, target_dir: Path, platform: PlatformSpec) -> list[Path]:
        return [
            self.executable_path(target_dir, platform),
            self.companion_path(target_dir, platform),
        ]

    def normalize(
        self,
        extracted_dir: Path,
        target_dir: Path,
        version: str,
        platform: PlatformSpec,
    ) -> Result[None, InjectError]:
        """Move uv and uvx from the scratch root or its first subdirectory.

        A missing uvx is tolerated; some builds omit it.
        """
        nested = first_subdir(extracted_dir)
        for name in ("uv", "uvx"):
            exe = platform.exe_name(name)
            candidates = [extracted_dir / exe]
            if nested is not None:
                candidates.append(nested / exe)
            found = next((c for c in candidates if c.is_file()), None)
            if found is None:
                if name == "uv":
                    return missing_executable(exe, extracted_dir)
                continue
            moved = move_file(found, target_dir / exe)
            if isinstance(moved, Err):
                return moved
        return Ok(None)

    def version_matches(self, output: str, version: str) -> bool:
        """``uv --version`` prints e.g. ``uv 0.9.18 (abc123 2025-12-01)``."""
        return version in output

"""Base definitions for runtime distributions.

This module defines the core abstractions:
- RuntimeKind: The closed set of runtimes that can be injected
- ArchiveFormat: Upstream archive formats
- RuntimeSpec: Immutable runtime metadata
- Runtime: Abstract base class holding one kind's resolution rules
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from rti.core.errors import ErrorKind, InjectError
from rti.core.result import Err, Ok, Result
from rti.platform.detection import PlatformSpec

__all__ = [
    "ArchiveFormat",
    "Runtime",
    "RuntimeKind",
    "RuntimeSpec",
    "unsupported_platform",
]


class RuntimeKind(Enum):
    """Runtimes this package knows how to fetch."""

    NODE = "node"
    BUN = "bun"
    UV = "uv"
    RIPGREP = "ripgrep"
    PYTHON = "python"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: str) -> Result[RuntimeKind, InjectError]:
        """Parse a user-supplied kind name (case-insensitive)."""
        value = raw.strip().lower()
        for kind in cls:
            if kind.value == value:
                return Ok(kind)
        supported = ", ".join(k.value for k in cls)
        return Err(
            InjectError(
                kind=ErrorKind.UNKNOWN_RUNTIME_KIND,
                message=f"Unknown runtime kind {raw!r}",
                hint=f"Supported kinds: {supported}",
            )
        )


class ArchiveFormat(Enum):
    """Upstream archive format; the value is the file extension."""

    TAR_GZ = "tar.gz"
    ZIP = "zip"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class RuntimeSpec:
    """Immutable runtime metadata.

    Attributes:
        kind: Runtime kind
        name: Human-readable name (e.g., "Node.js")
        default_version: Version installed when none is requested
        executable: Primary executable base name (without ``.exe``)
        homepage: Upstream project page
        version_args: Arguments that make the executable print its version
        supports_cleanup: Whether the archive carries removable bulk
    """

    kind: RuntimeKind
    name: str
    default_version: str
    executable: str
    homepage: str
    version_args: tuple[str, ...] = ("--version",)
    supports_cleanup: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Runtime name cannot be empty")
        if not self.default_version:
            raise ValueError(f"Runtime {self.kind} needs a default version")
        if not self.executable:
            raise ValueError(f"Runtime {self.kind} needs an executable name")


def unsupported_platform(kind: RuntimeKind, platform: PlatformSpec) -> Err[InjectError]:
    """Build the UNSUPPORTED_PLATFORM error for ``kind`` on ``platform``."""
    return Err(
        InjectError(
            kind=ErrorKind.UNSUPPORTED_PLATFORM,
            message=f"Unsupported platform for {kind}: {platform.os}-{platform.arch}",
        )
    )


class Runtime(ABC):
    """Resolution and layout rules for one runtime kind.

    Subclasses must define:
    - spec: RuntimeSpec with runtime metadata
    - matrix: (os, arch) pairs upstream publishes builds for
    - platform_token(): distributor-specific platform string
    - archive_format(): archive format for a platform
    - download_url(): URL for a version/platform
    - normalize(): move extracted files into the flat target layout
    - version_matches(): compare self-test output against a version
    """

    spec: RuntimeSpec
    matrix: tuple[tuple[str, str], ...] = ()

    @property
    def kind(self) -> RuntimeKind:
        return self.spec.kind

    @abstractmethod
    def platform_token(self, platform: PlatformSpec) -> Result[str, InjectError]:
        """Get the platform string embedded in release file names."""
        ...

    @abstractmethod
    def archive_format(self, platform: PlatformSpec) -> Result[ArchiveFormat, InjectError]:
        """Get the archive format published for ``platform``."""
        ...

    @abstractmethod
    def download_url(self, version: str, platform: PlatformSpec) -> Result[str, InjectError]:
        """Get the full download URL for ``version`` on ``platform``."""
        ...

    @abstractmethod
    def normalize(
        self,
        extracted_dir: Path,
        target_dir: Path,
        version: str,
        platform: PlatformSpec,
    ) -> Result[None, InjectError]:
        """Move files from the extracted archive into ``target_dir``.

        Args:
            extracted_dir: Scratch directory the archive was extracted into
            target_dir: Final install root (already empty)
            version: Version being installed
            platform: Target platform
        """
        ...

    @abstractmethod
    def version_matches(self, output: str, version: str) -> bool:
        """Check the executable's version output against ``version``."""
        ...

    def archive_name(self, version: str, platform: PlatformSpec) -> Result[str, InjectError]:
        """Local file name for the downloaded archive: ``{kind}-{version}.{ext}``."""
        fmt = self.archive_format(platform)
        if isinstance(fmt, Err):
            return fmt
        return Ok(f"{self.kind}-{version}.{fmt.value}")

    def executable_path(self, target_dir: Path, platform: PlatformSpec) -> Path:
        """Get path to the primary executable after installation.

        Default: target_dir / {executable}[.exe]
        """
        return target_dir / platform.exe_name(self.spec.executable)

    def executables(self, target_dir: Path, platform: PlatformSpec) -> list[Path]:
        """Get every executable that needs ``rwxr-xr-x`` after installation."""
        return [self.executable_path(target_dir, platform)]

    def version_command(self, target_dir: Path, platform: PlatformSpec) -> list[str]:
        """Command that prints the installed version."""
        return [str(self.executable_path(target_dir, platform)), *self.spec.version_args]

    def platform_warning(self, platform: PlatformSpec) -> str | None:
        """Warning to show when resolution for ``platform`` is a guess."""
        return None

    def supported_platforms(self) -> list[PlatformSpec]:
        return [PlatformSpec.of(os, arch) for os, arch in self.matrix]

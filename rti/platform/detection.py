"""Host detection and platform normalization.

Operating system and architecture strings come from many places (CLI flags,
config files, the host itself) and are spelled inconsistently: ``x86_64`` vs
``x64``, ``aarch64`` vs ``arm64``, ``windows`` vs ``win32``. ``PlatformSpec``
normalizes them into one vocabulary that the per-runtime resolvers consume:

- os: ``darwin``, ``linux``, ``win32`` (anything else is kept lowercased)
- arch: ``x64``, ``arm64``, ``arm``, ``armv7l``, ``ia32``, ``x86``,
  ``ppc64``, ``ppc64le``, ``s390``, ``s390x`` ... optionally followed by
  ``-musl`` to request a MUSL libc build.
"""

from __future__ import annotations

import os as _os
import platform as _platform
import sys as _sys
from dataclasses import dataclass
from functools import lru_cache

__all__ = [
    "PlatformSpec",
    "MUSL_SUFFIX",
    "normalize_os",
    "normalize_arch",
    "detect",
    "detect_os",
    "detect_arch",
]

MUSL_SUFFIX = "-musl"

_OS_ALIASES: dict[str, str] = {
    "darwin": "darwin",
    "macos": "darwin",
    "mac": "darwin",
    "osx": "darwin",
    "linux": "linux",
    "win32": "win32",
    "windows": "win32",
    "win": "win32",
    "cygwin": "win32",
    "msys": "win32",
}

_ARCH_ALIASES: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
}


def normalize_os(raw: str) -> str:
    """Map a host or user-supplied OS string onto darwin/linux/win32."""
    value = raw.strip().lower()
    return _OS_ALIASES.get(value, value)


def normalize_arch(raw: str) -> str:
    """Map an architecture string onto the resolver vocabulary.

    A trailing ``-musl`` is kept so resolvers can pick MUSL builds.
    """
    value = raw.strip().lower()
    musl = value.endswith(MUSL_SUFFIX)
    base = value.removesuffix(MUSL_SUFFIX)
    base = _ARCH_ALIASES.get(base, base)
    return f"{base}{MUSL_SUFFIX}" if musl else base


@dataclass(frozen=True, slots=True)
class PlatformSpec:
    """Normalized (operating system, architecture) pair."""

    os: str
    arch: str

    @classmethod
    def of(cls, os: str, arch: str) -> PlatformSpec:
        return cls(os=normalize_os(os), arch=normalize_arch(arch))

    @property
    def is_windows(self) -> bool:
        return self.os == "win32"

    @property
    def is_macos(self) -> bool:
        return self.os == "darwin"

    @property
    def is_linux(self) -> bool:
        return self.os == "linux"

    @property
    def is_musl(self) -> bool:
        return self.arch.endswith(MUSL_SUFFIX)

    @property
    def base_arch(self) -> str:
        """Architecture without the ``-musl`` suffix."""
        return self.arch.removesuffix(MUSL_SUFFIX)

    def exe_name(self, name: str) -> str:
        """Executable file name: ``name.exe`` on Windows, ``name`` elsewhere."""
        return f"{name}.exe" if self.is_windows else name

    def __str__(self) -> str:
        return f"{self.os}-{self.arch}"


@lru_cache(maxsize=1)
def detect_os() -> str:
    """Detect the host operating system (cached)."""
    # NOTE: sys.platform instead of platform.system(); the latter may query
    # WMI on Windows, which is slow on some machines.
    return normalize_os(_sys.platform)


@lru_cache(maxsize=1)
def detect_arch() -> str:
    """Detect the host CPU architecture (cached)."""
    if detect_os() == "win32":
        machine = (
            _os.environ.get("PROCESSOR_ARCHITEW6432")
            or _os.environ.get("PROCESSOR_ARCHITECTURE")
            or "x64"
        )
    else:
        machine = _platform.machine() or "x64"
    machine = machine.lower()
    if machine in ("i386", "i686", "x86"):
        return "ia32"
    if machine.startswith("armv7"):
        return "armv7l"
    return normalize_arch(machine)


def detect() -> PlatformSpec:
    """Detect the host platform."""
    return PlatformSpec(os=detect_os(), arch=detect_arch())

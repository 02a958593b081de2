"""Platform abstraction layer."""

from .detection import PlatformSpec, detect, normalize_arch, normalize_os
from .process import ProcessError, Runner, run

__all__ = [
    # detection
    "PlatformSpec",
    "detect",
    "normalize_arch",
    "normalize_os",
    # process
    "ProcessError",
    "Runner",
    "run",
]

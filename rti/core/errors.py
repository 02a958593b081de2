"""Error taxonomy and CLI exit codes.

Every failure that can abort an injection is described by an ``InjectError``
whose ``kind`` names the category. Each category maps to a stable process
exit code so scripts can tell configuration mistakes from network trouble.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, auto

__all__ = ["ErrorCode", "ErrorKind", "InjectError"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (unknown runtime, unsupported platform, bad config/proxy)
    - 3: Install error (archive could not be extracted or laid out)
    - 4: Network error (download failed, URL unreachable)
    - 5: I/O error (filesystem operation failed)
    """

    OK = 0
    USER_ERROR = 1
    INSTALL_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


class ErrorKind(Enum):
    """Category of an injection failure."""

    UNKNOWN_RUNTIME_KIND = auto()
    UNSUPPORTED_PLATFORM = auto()
    INVALID_PROXY_URL = auto()
    UNSUPPORTED_PROXY_PROTOCOL = auto()
    INVALID_CONFIG = auto()
    DOWNLOAD_FAILURE = auto()
    EXTRACTION_FAILURE = auto()
    EXECUTABLE_NOT_FOUND = auto()
    IO_FAILURE = auto()

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def exit_code(self) -> ErrorCode:
        return _EXIT_CODES[self]

    @property
    def is_config_error(self) -> bool:
        """True for failures detected before any I/O happens."""
        return self.exit_code == ErrorCode.USER_ERROR


_EXIT_CODES: dict[ErrorKind, ErrorCode] = {
    ErrorKind.UNKNOWN_RUNTIME_KIND: ErrorCode.USER_ERROR,
    ErrorKind.UNSUPPORTED_PLATFORM: ErrorCode.USER_ERROR,
    ErrorKind.INVALID_PROXY_URL: ErrorCode.USER_ERROR,
    ErrorKind.UNSUPPORTED_PROXY_PROTOCOL: ErrorCode.USER_ERROR,
    ErrorKind.INVALID_CONFIG: ErrorCode.USER_ERROR,
    ErrorKind.DOWNLOAD_FAILURE: ErrorCode.NETWORK_ERROR,
    ErrorKind.EXTRACTION_FAILURE: ErrorCode.INSTALL_ERROR,
    ErrorKind.EXECUTABLE_NOT_FOUND: ErrorCode.INSTALL_ERROR,
    ErrorKind.IO_FAILURE: ErrorCode.IO_ERROR,
}


@dataclass(frozen=True, slots=True)
class InjectError:
    """A fatal injection failure.

    Attributes:
        kind: Failure category
        message: Human-readable description (keeps the underlying diagnostic)
        hint: Optional suggestion shown below the message
    """

    kind: ErrorKind
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"

    @property
    def exit_code(self) -> ErrorCode:
        return self.kind.exit_code

"""Console output abstraction.

Services report progress and diagnostics through ``ConsoleProtocol`` so they
stay independent of the terminal library. ``RichConsole`` renders with rich;
``MockConsole`` records everything for assertions in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Styled line-oriented output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...


class RichConsole:
    """Console backed by rich.

    Errors and warnings go to stderr so stdout stays clean for scripting.
    """

    _STYLES = {
        Style.DEFAULT: "",
        Style.SUCCESS: "green",
        Style.ERROR: "red bold",
        Style.WARNING: "yellow",
        Style.INFO: "cyan",
        Style.DIM: "dim",
        Style.HEADER: "blue bold",
    }

    def __init__(self, *, quiet: bool = False) -> None:
        # Import rich lazily to keep library imports light
        from rich.console import Console

        self._out = Console(highlight=False)
        self._err = Console(stderr=True, highlight=False)
        self._quiet = quiet

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        if self._quiet and style in (Style.DIM, Style.INFO, Style.DEFAULT):
            return
        rich_style = self._STYLES.get(style, "")
        if rich_style:
            self._out.print(message, style=rich_style, markup=False)
        else:
            self._out.print(message, markup=False)

    def success(self, message: str) -> None:
        self._out.print(f"[green]OK[/green] {_escape(message)}")

    def error(self, message: str) -> None:
        self._err.print(f"[red bold]error:[/red bold] {_escape(message)}")

    def warning(self, message: str) -> None:
        self._err.print(f"[yellow]warning:[/yellow] {_escape(message)}")

    def info(self, message: str) -> None:
        if self._quiet:
            return
        self._out.print(f"[cyan]info:[/cyan] {_escape(message)}")

    def header(self, message: str) -> None:
        if self._quiet:
            return
        self._out.print(f"\n[blue bold]{_escape(message)}[/blue bold]")


def _escape(message: str) -> str:
    from rich.markup import escape

    return escape(message)


@dataclass
class OutputRecord:
    """A single line captured by MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]

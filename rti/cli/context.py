from __future__ import annotations

from dataclasses import dataclass

from rti.output.console import ConsoleProtocol, RichConsole
from rti.runtimes import DEFAULT_REGISTRY, RuntimeRegistry


@dataclass(frozen=True, slots=True)
class CLIContext:
    console: ConsoleProtocol
    registry: RuntimeRegistry


def build_context(*, quiet: bool = False) -> CLIContext:
    return CLIContext(console=RichConsole(quiet=quiet), registry=DEFAULT_REGISTRY)

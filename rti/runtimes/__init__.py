"""Runtime definitions and registry.

Usage:
    from rti.runtimes import DEFAULT_REGISTRY, RuntimeKind

    node = DEFAULT_REGISTRY.get(RuntimeKind.NODE)
    print(node.spec.default_version)
"""

from __future__ import annotations

from rti.runtimes.base import ArchiveFormat, Runtime, RuntimeKind, RuntimeSpec
from rti.runtimes.bun import BunRuntime
from rti.runtimes.node import NodeRuntime
from rti.runtimes.python import PythonRuntime
from rti.runtimes.registry import RuntimeRegistry
from rti.runtimes.ripgrep import RipgrepRuntime
from rti.runtimes.uv import UvRuntime

__all__ = [
    # Base types
    "ArchiveFormat",
    "Runtime",
    "RuntimeKind",
    "RuntimeSpec",
    # Runtime classes
    "BunRuntime",
    "NodeRuntime",
    "PythonRuntime",
    "RipgrepRuntime",
    "UvRuntime",
    # Registry
    "ALL_RUNTIMES",
    "DEFAULT_REGISTRY",
    "RuntimeRegistry",
]


ALL_RUNTIMES: tuple[Runtime, ...] = (
    NodeRuntime(),
    BunRuntime(),
    UvRuntime(),
    RipgrepRuntime(),
    PythonRuntime(),
)

DEFAULT_REGISTRY = RuntimeRegistry(ALL_RUNTIMES)

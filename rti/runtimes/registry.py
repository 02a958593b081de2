"""Runtime registry - lookup of per-kind rules.

The registry is built once from a fixed set of Runtime instances and never
changes afterwards. Construction checks that every RuntimeKind has exactly
one definition, so lookups can only fail for names outside the enumeration.

Usage:
    from rti.runtimes import DEFAULT_REGISTRY

    match DEFAULT_REGISTRY.lookup("uv"):
        case Ok(runtime):
            print(runtime.spec.default_version)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from collections.abc import Iterable

from rti.core.errors import InjectError
from rti.core.result import Err, Ok, Result
from rti.runtimes.base import Runtime, RuntimeKind

__all__ = ["RuntimeRegistry"]


class RuntimeRegistry:
    """Immutable mapping from RuntimeKind to its Runtime."""

    def __init__(self, runtimes: Iterable[Runtime]) -> None:
        """Build the registry.

        Raises:
            ValueError: If a kind is defined twice or has no definition.
        """
        by_kind: dict[RuntimeKind, Runtime] = {}
        for runtime in runtimes:
            if runtime.kind in by_kind:
                raise ValueError(f"Runtime {runtime.kind} is defined twice")
            by_kind[runtime.kind] = runtime

        missing = [str(kind) for kind in RuntimeKind if kind not in by_kind]
        if missing:
            raise ValueError(f"No runtime definition for: {', '.join(missing)}")

        # Enumeration order, so the first kind is the default
        self._by_kind = {kind: by_kind[kind] for kind in RuntimeKind}

    def all(self) -> tuple[Runtime, ...]:
        return tuple(self._by_kind.values())

    def get(self, kind: RuntimeKind) -> Runtime:
        return self._by_kind[kind]

    def lookup(self, kind: RuntimeKind | str) -> Result[Runtime, InjectError]:
        """Get the runtime for ``kind`` (enum member or name)."""
        if isinstance(kind, str):
            parsed = RuntimeKind.parse(kind)
            if isinstance(parsed, Err):
                return parsed
            kind = parsed.value
        return Ok(self._by_kind[kind])

    @property
    def default_kind(self) -> RuntimeKind:
        return next(iter(self._by_kind))

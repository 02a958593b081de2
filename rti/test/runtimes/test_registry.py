"""Tests for rti.runtimes.registry module."""

from __future__ import annotations

import pytest

from rti.core.errors import ErrorKind
from rti.core.result import Err, Ok
from rti.runtimes import ALL_RUNTIMES, DEFAULT_REGISTRY, NodeRuntime, RuntimeKind, RuntimeRegistry


class TestRegistry:
    def test_every_kind_is_registered(self) -> None:
        kinds = [runtime.kind for runtime in DEFAULT_REGISTRY.all()]
        assert kinds == list(RuntimeKind)

    def test_default_kind_is_node(self) -> None:
        assert DEFAULT_REGISTRY.default_kind == RuntimeKind.NODE

    def test_lookup_by_name(self) -> None:
        result = DEFAULT_REGISTRY.lookup("RipGrep")
        assert isinstance(result, Ok)
        assert result.value.kind == RuntimeKind.RIPGREP

    def test_lookup_by_enum(self) -> None:
        assert DEFAULT_REGISTRY.lookup(RuntimeKind.UV) == Ok(DEFAULT_REGISTRY.get(RuntimeKind.UV))

    def test_lookup_unknown(self) -> None:
        result = DEFAULT_REGISTRY.lookup("deno")
        assert isinstance(result, Err)
        assert result.error.kind == ErrorKind.UNKNOWN_RUNTIME_KIND
        assert result.error.hint is not None
        assert "node" in result.error.hint

    def test_duplicate_rejected(self) -> None:
        with pytest.raises(ValueError, match="defined twice"):
            RuntimeRegistry([*ALL_RUNTIMES, NodeRuntime()])

    def test_missing_rejected(self) -> None:
        with pytest.raises(ValueError, match="No runtime definition"):
            RuntimeRegistry([NodeRuntime()])


@pytest.mark.parametrize("runtime", ALL_RUNTIMES, ids=lambda r: str(r.kind))
def test_spec_is_complete(runtime: object) -> None:
    from rti.runtimes import Runtime

    assert isinstance(runtime, Runtime)
    assert runtime.spec.default_version
    assert runtime.spec.homepage.startswith("https://")
    assert runtime.supported_platforms()
    for platform in runtime.supported_platforms():
        assert isinstance(runtime.download_url(runtime.spec.default_version, platform), Ok)


def test_only_node_supports_cleanup() -> None:
    supported = [r.kind for r in ALL_RUNTIMES if r.spec.supports_cleanup]
    assert supported == [RuntimeKind.NODE]

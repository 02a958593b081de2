"""Version self-test comparison, per runtime kind."""

from __future__ import annotations

import pytest

from rti.runtimes import DEFAULT_REGISTRY, RuntimeKind

# (kind, requested version, executable output, expected match)
CASES = [
    (RuntimeKind.NODE, "v24.12.0", "v24.12.0\n", True),
    (RuntimeKind.NODE, "v24.12.0", "v24.12.1", False),
    (RuntimeKind.NODE, "24.12.0", "v24.12.0", False),
    (RuntimeKind.BUN, "v1.3.5", "1.3.5\n", True),
    (RuntimeKind.BUN, "1.3.5", "1.3.5", True),
    (RuntimeKind.BUN, "v1.3.5", "1.3.4", False),
    (RuntimeKind.UV, "0.9.18", "uv 0.9.18 (0cee76417 2025-12-16)", True),
    (RuntimeKind.UV, "0.9.18", "uv 0.9.17", False),
    (RuntimeKind.RIPGREP, "14.1.1", "ripgrep 14.1.1 (rev 4649aa9700)\n", True),
    (RuntimeKind.RIPGREP, "14.1.1", "ripgrep 14.1.0", False),
    (RuntimeKind.PYTHON, "3.12.12+20251014", "Python 3.12.12", True),
    (RuntimeKind.PYTHON, "3.12.12", "Python 3.12.12", True),
    (RuntimeKind.PYTHON, "3.12.12+20251014", "Python 3.12.11", False),
]


@pytest.mark.parametrize(("kind", "version", "output", "expected"), CASES)
def test_version_matches(kind: RuntimeKind, version: str, output: str, expected: bool) -> None:
    runtime = DEFAULT_REGISTRY.get(kind)
    assert runtime.version_matches(output, version) is expected


def test_node_and_bun_differ_on_same_input() -> None:
    node = DEFAULT_REGISTRY.get(RuntimeKind.NODE)
    bun = DEFAULT_REGISTRY.get(RuntimeKind.BUN)
    assert not node.version_matches("1.3.5", "v1.3.5")
    assert bun.version_matches("1.3.5", "v1.3.5")


def test_version_arguments() -> None:
    assert DEFAULT_REGISTRY.get(RuntimeKind.NODE).spec.version_args == ("-v",)
    for kind in (RuntimeKind.BUN, RuntimeKind.UV, RuntimeKind.RIPGREP, RuntimeKind.PYTHON):
        assert DEFAULT_REGISTRY.get(kind).spec.version_args == ("--version",)

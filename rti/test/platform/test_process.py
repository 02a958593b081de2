"""Tests for rti.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from rti.core.result import Err, Ok
from rti.platform.process import ProcessError, run


class TestProcessError:
    def test_str_short_command(self) -> None:
        error = ProcessError(command=("node", "-v"), returncode=1, stdout="", stderr="")
        assert str(error) == "node -v failed (exit 1)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(command=("a", "b", "c", "d"), returncode=2, stdout="", stderr="bad")
        assert str(error) == "a b c ... failed (exit 2): bad"

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_stdout(self) -> None:
        result = run([sys.executable, "-c", "print('v24.12.0')"])
        assert isinstance(result, Ok)
        assert result.value.strip() == "v24.12.0"

    def test_nonzero_exit(self) -> None:
        result = run([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert isinstance(result, Err)
        assert result.error.returncode == 3

    def test_missing_executable(self, tmp_path: Path) -> None:
        result = run([str(tmp_path / "does-not-exist")])
        assert isinstance(result, Err)
        assert result.error.returncode == -1

    def test_cwd(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path)
        assert isinstance(result, Ok)
        assert Path(result.value.strip()).resolve() == tmp_path.resolve()

    def test_timeout(self) -> None:
        result = run([sys.executable, "-c", "import time; time.sleep(5)"], timeout=0.2)
        assert isinstance(result, Err)
        assert "timed out" in result.error.stderr

"""Tests for rti.core.result module."""

import pytest

from rti.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    def test_value(self) -> None:
        assert Ok(42).value == 42

    def test_flags(self) -> None:
        assert Ok(1).is_ok() is True
        assert Ok(1).is_err() is False

    def test_unwrap(self) -> None:
        assert Ok("x").unwrap() == "x"
        assert Ok("x").unwrap_or("y") == "x"

    def test_map(self) -> None:
        assert Ok(21).map(lambda x: x * 2) == Ok(42)

    def test_map_err_is_noop(self) -> None:
        assert Ok(1).map_err(lambda e: f"error: {e}") == Ok(1)


class TestErr:
    def test_flags(self) -> None:
        assert Err("boom").is_err() is True
        assert Err("boom").is_ok() is False

    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("boom").unwrap()

    def test_unwrap_or(self) -> None:
        assert Err("boom").unwrap_or(7) == 7

    def test_map_is_noop(self) -> None:
        assert Err("boom").map(lambda x: x * 2) == Err("boom")

    def test_map_err(self) -> None:
        assert Err("boom").map_err(str.upper) == Err("BOOM")


def test_type_guards() -> None:
    ok: Result[int, str] = Ok(1)
    err: Result[int, str] = Err("no")
    assert is_ok(ok) and not is_err(ok)
    assert is_err(err) and not is_ok(err)


def test_pattern_matching() -> None:
    result: Result[int, str] = Ok(3)
    match result:
        case Ok(value):
            assert value == 3
        case Err(_):
            pytest.fail("expected Ok")

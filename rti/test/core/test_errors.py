"""Tests for rti.core.errors module."""

from __future__ import annotations

import pytest

from rti.core.errors import ErrorCode, ErrorKind, InjectError


class TestErrorKind:
    @pytest.mark.parametrize(
        "kind",
        [
            ErrorKind.UNKNOWN_RUNTIME_KIND,
            ErrorKind.UNSUPPORTED_PLATFORM,
            ErrorKind.INVALID_PROXY_URL,
            ErrorKind.UNSUPPORTED_PROXY_PROTOCOL,
            ErrorKind.INVALID_CONFIG,
        ],
    )
    def test_config_errors_are_user_errors(self, kind: ErrorKind) -> None:
        assert kind.exit_code == ErrorCode.USER_ERROR
        assert kind.is_config_error

    def test_download_failure_is_network_error(self) -> None:
        assert ErrorKind.DOWNLOAD_FAILURE.exit_code == ErrorCode.NETWORK_ERROR
        assert not ErrorKind.DOWNLOAD_FAILURE.is_config_error

    def test_install_failures(self) -> None:
        assert ErrorKind.EXTRACTION_FAILURE.exit_code == ErrorCode.INSTALL_ERROR
        assert ErrorKind.EXECUTABLE_NOT_FOUND.exit_code == ErrorCode.INSTALL_ERROR

    def test_every_kind_has_exit_code(self) -> None:
        for kind in ErrorKind:
            assert kind.exit_code != ErrorCode.OK

    def test_str(self) -> None:
        assert str(ErrorKind.UNSUPPORTED_PLATFORM) == "unsupported platform"


class TestInjectError:
    def test_str_includes_kind(self) -> None:
        error = InjectError(kind=ErrorKind.IO_FAILURE, message="disk full")
        assert str(error) == "io failure: disk full"

    def test_exit_code(self) -> None:
        error = InjectError(kind=ErrorKind.IO_FAILURE, message="disk full")
        assert error.exit_code == ErrorCode.IO_ERROR
        assert int(error.exit_code) == 5

    def test_frozen(self) -> None:
        error = InjectError(kind=ErrorKind.IO_FAILURE, message="x")
        with pytest.raises(AttributeError):
            error.message = "y"  # type: ignore[misc]

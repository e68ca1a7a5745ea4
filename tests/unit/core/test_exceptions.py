"""
Unit tests for custom exceptions.
"""

import pytest

from fsqlctl.core.exceptions import (
    UNREADABLE_BODY,
    ApplicationError,
    ConfigurationError,
    DispatchError,
    HttpStatusError,
    InputError,
    TransportError,
    TransportFailure,
)


class TestApplicationError:
    """Tests for the base exception."""

    def test_message_and_code(self):
        error = ApplicationError("Something went wrong", code="TEST_ERROR")
        assert error.message == "Something went wrong"
        assert error.code == "TEST_ERROR"
        assert str(error) == "Something went wrong"

    def test_default_code(self):
        assert ApplicationError("x").code == "SYS_INTERNAL_ERROR"

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (ConfigurationError(), "CFG_INVALID"),
            (InputError(), "IO_INPUT_ERROR"),
        ],
    )
    def test_subclass_codes(self, error, code):
        assert isinstance(error, ApplicationError)
        assert error.code == code


class TestTransportError:
    """Tests for failures before a response arrived."""

    def test_is_dispatch_error(self):
        assert isinstance(TransportError(TransportFailure.OTHER), DispatchError)

    def test_timeout_message(self):
        error = TransportError(TransportFailure.TIMEOUT)
        assert str(error) == "Request timed out"
        assert error.code == "NET_TIMEOUT"

    def test_connect_message_has_hint(self):
        error = TransportError(TransportFailure.CONNECT, "connection refused")
        assert "check if the server is running" in str(error)
        assert str(error).endswith(": connection refused")

    def test_build_message_has_hint(self):
        assert "check your URL" in str(TransportError(TransportFailure.BUILD))


class TestHttpStatusError:
    """Tests for non-2xx responses."""

    def test_carries_status_and_body(self):
        error = HttpStatusError(401, '{"error":"unauthorized"}', "Unauthorized")
        assert isinstance(error, DispatchError)
        assert error.status_code == 401
        assert error.body == '{"error":"unauthorized"}'
        assert str(error) == 'Server returned error 401 Unauthorized: {"error":"unauthorized"}'
        assert error.code == "HTTP_401"

    def test_without_reason_phrase(self):
        assert str(HttpStatusError(599, "x")) == "Server returned error 599: x"

    def test_unreadable_body(self):
        error = HttpStatusError(500, UNREADABLE_BODY, "Internal Server Error")
        assert str(error) == "Server returned error 500 Internal Server Error (could not read response body)"

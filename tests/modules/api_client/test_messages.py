"""Tests for user-facing error messages."""

import pytest

from tourline.modules.api_client import (
    ApiError,
    ErrorAction,
    ErrorMessage,
    ErrorType,
    NetworkError,
    format_error_for_log,
    get_error_action,
    get_error_message,
    get_error_type,
    is_network_error,
    parse_error,
)
from tourline.modules.api_client import messages


def api_error(message: str = "", status: int = 400, code: str = None) -> ApiError:
    return ApiError(message, status_code=status, method="POST", url="/auth/login", code=code)


class TestStructuredCodes:
    @pytest.mark.parametrize("code,expected", [
        ("EMAIL_TAKEN", messages.EMAIL_TAKEN),
        ("INVALID_CREDENTIALS", messages.INVALID_CREDENTIALS),
        ("CODE_EXPIRED", messages.CODE_EXPIRED),
        ("RESET_TOKEN_EXPIRED", messages.RESET_LINK_EXPIRED),
        ("RATE_LIMITED", messages.TOO_MANY_ATTEMPTS),
    ])
    def test_code_wins_over_message(self, code, expected):
        """The backend code decides, whatever the message says."""
        assert parse_error(api_error("internal server thing", code=code)) == expected

    def test_unknown_code_falls_through(self):
        error = api_error("Usuario no encontrado", status=404, code="SOMETHING_NEW")
        assert parse_error(error) == messages.USER_NOT_FOUND


class TestTaxonomy:
    def test_network_error(self):
        """No response maps to the connection message with a retry action."""
        result = parse_error(NetworkError("Network Error"))
        assert result == messages.CONNECTION_ERROR
        assert result.action is ErrorAction.RETRY

    def test_session_expired(self):
        result = parse_error(api_error("Invalid token", status=401))
        assert result == messages.SESSION_EXPIRED
        assert result.action is ErrorAction.LOGIN

    def test_forbidden(self):
        assert parse_error(api_error("Forbidden", status=403)) == messages.ACCESS_DENIED

    def test_not_found(self):
        assert parse_error(api_error("Tour missing", status=404)) == messages.NOT_FOUND

    def test_server_error(self):
        assert parse_error(api_error("Oops", status=503)) == messages.SERVER_ERROR

    def test_rate_limited_status(self):
        assert parse_error(api_error("Slow down", status=429)) == messages.TOO_MANY_ATTEMPTS


class TestLegacyMessages:
    @pytest.mark.parametrize("raw,expected", [
        ("Email already registered", messages.EMAIL_TAKEN),
        ("El email ya está registrado", messages.EMAIL_TAKEN),
        ("Credenciales inválidas", messages.INVALID_CREDENTIALS),
        ("Incorrect password", messages.INVALID_CREDENTIALS),
        ("Código inválido", messages.INVALID_CODE),
        ("Verification code expired", messages.CODE_EXPIRED),
        ("Reset token is invalid", messages.INVALID_RESET_LINK),
        ("Reset token expired", messages.RESET_LINK_EXPIRED),
        ("Validation failed: name is required", messages.INVALID_DATA),
    ])
    def test_substring_fallback(self, raw, expected):
        assert parse_error(api_error(raw)) == expected

    def test_short_clean_message_passed_through(self):
        result = parse_error(api_error("Tour is fully booked"))
        assert result == ErrorMessage(title="Error", message="Tour is fully booked")

    def test_internal_messages_hidden(self):
        """Database internals never reach the user."""
        result = parse_error(api_error("Invalid `prisma.tour.findMany()` invocation"))
        assert result == messages.DEFAULT_ERROR


class TestInputs:
    def test_none(self):
        assert parse_error(None) == messages.DEFAULT_ERROR

    def test_plain_exception(self):
        assert parse_error(RuntimeError("Network request failed")) == messages.CONNECTION_ERROR

    def test_long_unknown_message(self):
        assert parse_error(ValueError("x" * 200)) == messages.DEFAULT_ERROR

    def test_already_translated(self):
        """Objects carrying an ErrorMessage are returned as-is."""

        class Translated(Exception):
            error_message = messages.INVALID_CODE

        assert parse_error(Translated()) == messages.INVALID_CODE


class TestHelpers:
    def test_get_error_message_and_action(self):
        error = api_error(code="CODE_EXPIRED")
        assert get_error_message(error) == messages.CODE_EXPIRED.message
        assert get_error_action(error) is ErrorAction.RESEND

    @pytest.mark.parametrize("error,expected", [
        (NetworkError("down"), ErrorType.NETWORK),
        (api_error(status=500), ErrorType.SERVER),
        (api_error(status=401), ErrorType.UNAUTHORIZED),
        (api_error(status=403), ErrorType.UNAUTHORIZED),
        (api_error(status=404), ErrorType.NOT_FOUND),
        (api_error(status=400), ErrorType.GENERIC),
        (RuntimeError("timeout exceeded"), ErrorType.NETWORK),
        (RuntimeError("boom"), ErrorType.GENERIC),
    ])
    def test_get_error_type(self, error, expected):
        assert get_error_type(error) is expected

    def test_is_network_error(self):
        assert is_network_error(NetworkError("down")) is True
        assert is_network_error(api_error(status=500)) is False

    def test_format_error_for_log(self):
        error = api_error("Bad login", status=400, code="INVALID_CREDENTIALS")
        assert format_error_for_log(error) == "Error: Bad login (Status: 400) (Code: INVALID_CREDENTIALS)"

    def test_format_network_error_for_log(self):
        error = NetworkError("Request timed out", reason=NetworkError.TIMEOUT)
        assert format_error_for_log(error) == "Error: Request timed out (Code: timeout)"

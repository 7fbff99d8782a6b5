"""Tests for shared/exceptions.py."""

from tourline.shared.exceptions import (
    TourlineError,
    AuthenticationError,
    ExternalServiceError,
)


class TestTourlineError:
    def test_message_and_str(self):
        """TourlineError should store message."""
        error = TourlineError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code(self):
        """Code should default to the class name."""
        assert TourlineError("Test error").code == "TourlineError"
        assert AuthenticationError("Rejected").code == "AuthenticationError"

    def test_custom_code_and_details(self):
        error = TourlineError("Test error", code="CUSTOM", details={"key": "value"})
        assert error.code == "CUSTOM"
        assert error.details == {"key": "value"}

    def test_details_are_copied(self):
        """Mutating an error's details never touches the caller's dict."""
        details = {"key": "value"}
        error = TourlineError("Test error", details=details)
        error.details["extra"] = 1
        assert details == {"key": "value"}


class TestExternalServiceError:
    def test_records_service(self):
        """ExternalServiceError should include the service in details."""
        error = ExternalServiceError("Backend down", service="tourline-api", details={"status_code": 503})
        assert isinstance(error, TourlineError)
        assert error.service == "tourline-api"
        assert error.details == {"status_code": 503, "service": "tourline-api"}

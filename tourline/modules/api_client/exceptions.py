"""
API client module exceptions.

ApiError covers every failed call. NetworkError is the subclass for calls
that never produced a response (timeouts, DNS failures, refused connections).
"""

from typing import Any, Optional

from tourline.shared.exceptions import ExternalServiceError

from .models import ErrorType

SERVICE_NAME = "tourline-api"


class ApiError(ExternalServiceError):
    """Raised when the backend answers with a non-success response."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        method: str = "",
        url: str = "",
        code: Optional[str] = None,
        body: Any = None,
    ):
        super().__init__(
            message,
            service=SERVICE_NAME,
            code=code or "API_ERROR",
            details={"status_code": status_code, "method": method, "url": url},
        )
        self.status_code = status_code
        self.method = method
        self.url = url
        self.body = body
        # Structured code sent by the backend, if any
        self.backend_code = code

    @property
    def has_response(self) -> bool:
        return self.status_code is not None

    @property
    def error_type(self) -> ErrorType:
        """Classify the failure from the response shape."""
        status = self.status_code
        if status is None:
            return ErrorType.NETWORK
        if status >= 500:
            return ErrorType.SERVER
        if status in (401, 403):
            return ErrorType.UNAUTHORIZED
        if status == 404:
            return ErrorType.NOT_FOUND
        return ErrorType.GENERIC


class NetworkError(ApiError):
    """Raised when a request fails without any response."""

    TIMEOUT = "timeout"
    DNS = "dns"
    NETWORK = "network"

    def __init__(self, message: str, reason: str = NETWORK, method: str = "", url: str = ""):
        super().__init__(message, status_code=None, method=method, url=url, code="NETWORK_ERROR")
        self.backend_code = None
        self.reason = reason
        self.details["reason"] = reason

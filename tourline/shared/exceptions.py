"""
Base exception classes for the Tourline client core.

Module exceptions derive from one of these:
- ApiError / NetworkError -> ExternalServiceError
- SessionError -> AuthenticationError
- credential and connectivity errors -> TourlineError
"""

from typing import Optional, Any


class TourlineError(Exception):
    """
    Root of every error raised by the client core.

    Attributes:
        message: Human-readable description
        code: Machine-readable code (defaults to the class name)
        details: Extra context for logs
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or type(self).__name__
        self.details = dict(details or {})


class AuthenticationError(TourlineError):
    """A sign-in, sign-up or credential operation was rejected."""

    pass


class ExternalServiceError(TourlineError):
    """A call to a remote service failed."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, {**(details or {}), "service": service})
        self.service = service

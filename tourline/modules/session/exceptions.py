"""
Session module exceptions.

These carry an already-translated ErrorMessage so the UI can show the
title/message/action triple without re-parsing the underlying failure.
"""

from typing import Optional

from tourline.shared.exceptions import AuthenticationError
from tourline.modules.api_client.messages import get_error_type, parse_error
from tourline.modules.api_client.models import ErrorAction, ErrorMessage, ErrorType


class SessionError(AuthenticationError):
    """Raised when a sign-in, sign-up or password reset fails."""

    def __init__(
        self,
        error_message: ErrorMessage,
        error_type: ErrorType = ErrorType.GENERIC,
        operation: str = "",
    ):
        super().__init__(
            error_message.message,
            code="SESSION_ERROR",
            details={
                "title": error_message.title,
                "action": error_message.action.value if error_message.action else None,
                "error_type": error_type.value,
                "operation": operation,
            },
        )
        self.error_message = error_message
        self.error_type = error_type
        self.operation = operation

    @property
    def title(self) -> str:
        return self.error_message.title

    @property
    def action(self) -> Optional[ErrorAction]:
        return self.error_message.action

    @classmethod
    def from_error(cls, error: BaseException, operation: str = "") -> "SessionError":
        """Translate any failure into a SessionError. Chain with `raise ... from error`."""
        return cls(parse_error(error), error_type=get_error_type(error), operation=operation)

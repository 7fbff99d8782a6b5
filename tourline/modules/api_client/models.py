"""
API client module data models.

RequestDescriptor and RetryContext are immutable: a retry re-dispatches the
same descriptor and threads a new context through the loop, so concurrent
requests never share mutable retry state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorType(str, Enum):
    """Coarse failure taxonomy used to pick user-facing copy."""

    NETWORK = "network"
    SERVER = "server"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    GENERIC = "generic"


class ErrorAction(str, Enum):
    """What the UI should offer the user after a failure."""

    LOGIN_OR_VERIFY = "login_or_verify"
    RESEND = "resend"
    RETRY = "retry"
    LOGIN = "login"
    WAIT = "wait"


class ErrorMessage(BaseModel):
    """User-presentable description of a failure."""

    model_config = {"frozen": True}

    title: str = Field(..., description="Short headline")
    message: str = Field(..., description="Explanation shown to the user")
    action: Optional[ErrorAction] = Field(None, description="Suggested follow-up")


@dataclass(frozen=True)
class RequestDescriptor:
    """
    One logical outbound request.

    Attributes:
        method: HTTP verb, upper-case
        url: Path relative to the API base URL (or an absolute URL)
        json: JSON body, if any
        params: Query string parameters
        headers: Caller-supplied headers (auth is added per attempt)
    """

    method: str
    url: str
    json: Any = None
    params: Optional[dict[str, Any]] = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RetryContext:
    """
    Retry bookkeeping for a single attempt.

    Attributes:
        attempt: Number of retries already performed (0 for the first dispatch)
        delay: Backoff slept before this attempt, in seconds
    """

    attempt: int = 0
    delay: float = 0.0

    @property
    def is_retry(self) -> bool:
        return self.attempt > 0

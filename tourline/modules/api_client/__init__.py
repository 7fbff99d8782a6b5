"""
API client module.

Wraps every backend call: bearer-token injection, retry with exponential
backoff, and session invalidation on a rejected session check.

Public API:
- IApiClient / ApiClient: Outbound calls
- RetryPolicy, RetryContext: Backoff configuration and per-attempt state
- ApiError, NetworkError: Failure types
- parse_error and helpers: User-facing error messages
"""

from .interfaces import IApiClient
from .client import ApiClient
from .models import ErrorAction, ErrorMessage, ErrorType, RequestDescriptor, RetryContext
from .retry import DEFAULT_RETRYABLE_STATUS_CODES, RetryPolicy
from .exceptions import ApiError, NetworkError
from .messages import (
    format_error_for_log,
    get_error_action,
    get_error_message,
    get_error_type,
    is_network_error,
    parse_error,
)

__all__ = [
    # Interface
    "IApiClient",
    "ApiClient",
    # Models
    "ErrorAction",
    "ErrorMessage",
    "ErrorType",
    "RequestDescriptor",
    "RetryContext",
    # Retry
    "DEFAULT_RETRYABLE_STATUS_CODES",
    "RetryPolicy",
    # Exceptions
    "ApiError",
    "NetworkError",
    # Messages
    "format_error_for_log",
    "get_error_action",
    "get_error_message",
    "get_error_type",
    "is_network_error",
    "parse_error",
]

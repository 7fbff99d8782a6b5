"""
Shared infrastructure for the Tourline client core.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- exceptions: Base exception classes
- models: Backend response envelope models

Note: Session and transport logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .exceptions import TourlineError, AuthenticationError, ExternalServiceError
from .models import ApiResponse, ApiErrorBody, ApiErrorDetail, Pagination

__all__ = [
    "Settings",
    "get_settings",
    "TourlineError",
    "AuthenticationError",
    "ExternalServiceError",
    "ApiResponse",
    "ApiErrorBody",
    "ApiErrorDetail",
    "Pagination",
]

"""
API client module interface.

Resource wrappers (auth, bookings, guides, ...) should depend on IApiClient,
not the concrete httpx-backed implementation.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from tourline.shared.models import ApiResponse


@runtime_checkable
class IApiClient(Protocol):
    """
    Interface for outbound backend calls.

    Implementations attach credentials, retry transient failures, and react
    to an invalidated session. They know nothing about business semantics.
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """
        Send a request and return the decoded response body.

        Raises:
            NetworkError: If no response was received after all retries
            ApiError: If the backend answered with a failure status
        """
        ...

    async def request_envelope(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> ApiResponse[Any]:
        """
        Send a request and parse the { success, data, pagination? } envelope.

        Raises:
            ApiError: If the call fails or the envelope reports success=false
        """
        ...

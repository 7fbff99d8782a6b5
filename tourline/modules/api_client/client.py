"""
Backend HTTP client.

Single choke point for every outbound call. Each attempt:
1. reads the current token from the credential store and injects it
2. dispatches through httpx
3. maps transport failures to NetworkError and failure statuses to ApiError

Transient failures are retried per RetryPolicy. A 401 from the session-check
endpoint clears stored credentials; a 401 anywhere else is returned to the
caller untouched, since it may be a role-gated resource rather than an
expired session.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from tourline.shared.config import Settings, get_settings
from tourline.shared.models import ApiErrorBody, ApiResponse
from tourline.modules.credentials.interfaces import ICredentialStore

from .interfaces import IApiClient
from .exceptions import ApiError, NetworkError
from .models import RequestDescriptor, RetryContext
from .retry import RetryPolicy

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Content-Type": "application/json"}

# Substrings httpx/OS resolvers put in DNS failure messages
_DNS_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo",
    "temporary failure in name resolution",
    "no address associated",
)


class ApiClient(IApiClient):
    """
    httpx-backed implementation of IApiClient.

    Usable as an async context manager; otherwise call aclose() when done.
    """

    def __init__(
        self,
        credential_store: ICredentialStore,
        settings: Optional[Settings] = None,
        policy: Optional[RetryPolicy] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        """
        Initialize the client.

        Args:
            credential_store: Source of the bearer token, read on every attempt
            settings: Client settings. Defaults to get_settings().
            policy: Retry policy. Defaults to one built from settings.
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
            sleep: Awaitable used for backoff delays. Defaults to asyncio.sleep.
        """
        self._settings = settings or get_settings()
        self._credentials = credential_store
        self._policy = policy or RetryPolicy.from_settings(self._settings)
        self._sleep = sleep or asyncio.sleep
        self._session_check_path = self._settings.session_check_path.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self._settings.api_base_url,
            timeout=httpx.Timeout(self._settings.request_timeout),
            headers=DEFAULT_HEADERS,
            transport=transport,
        )

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        descriptor = RequestDescriptor(
            method=method.upper(),
            url=url,
            json=json,
            params=params,
            headers=dict(headers or {}),
        )
        context = RetryContext()

        while True:
            try:
                return await self._dispatch(descriptor, context)
            except ApiError as error:
                await self._handle_unauthorized(descriptor, error)

                if not self._policy.should_retry(error, context):
                    if context.is_retry and self._policy.is_retryable(error):
                        logger.warning(
                            f"{descriptor.method} {descriptor.url} failed after "
                            f"{context.attempt} retries: {error.message}"
                        )
                    raise

                context = self._policy.next_context(context)
                logger.warning(
                    f"{descriptor.method} {descriptor.url} failed ({error.message}); "
                    f"retry {context.attempt}/{self._policy.max_retries} "
                    f"in {context.delay:.2f}s"
                )
                await self._sleep(context.delay)

    async def request_envelope(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> ApiResponse[Any]:
        body = await self.request(method, url, json=json, params=params, headers=headers)

        if isinstance(body, dict) and body.get("success") is False:
            error_body = ApiErrorBody.parse(body)
            raise ApiError(
                (error_body and error_body.error_message) or "Request was not successful",
                status_code=200,
                method=method.upper(),
                url=url,
                code=error_body.error_code if error_body else None,
                body=body,
            )

        try:
            return ApiResponse[Any].model_validate(body)
        except PydanticValidationError as e:
            raise ApiError(
                f"Unexpected response shape from {url}",
                status_code=200,
                method=method.upper(),
                url=url,
                code="INVALID_RESPONSE",
                body=body,
            ) from e

    async def get(self, url: str, **kwargs) -> Any:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> Any:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs) -> Any:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs) -> Any:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs) -> Any:
        return await self.request("DELETE", url, **kwargs)

    async def _dispatch(self, descriptor: RequestDescriptor, context: RetryContext) -> Any:
        """Send one attempt of a logical request."""
        headers = dict(descriptor.headers)
        token = await self._credentials.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        if context.is_retry:
            logger.debug(f"Retry {context.attempt} of {descriptor.method} {descriptor.url}")

        try:
            response = await self._http.request(
                descriptor.method,
                descriptor.url,
                json=descriptor.json,
                params=descriptor.params,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request timed out: {descriptor.method} {descriptor.url}",
                reason=NetworkError.TIMEOUT,
                method=descriptor.method,
                url=descriptor.url,
            ) from e
        except httpx.TransportError as e:
            raise NetworkError(
                f"Network Error: {e}" if str(e) else "Network Error",
                reason=self._transport_reason(e),
                method=descriptor.method,
                url=descriptor.url,
            ) from e

        if response.is_success:
            return self._decode(response)

        raise self._error_from_response(descriptor, response)

    async def _handle_unauthorized(self, descriptor: RequestDescriptor, error: ApiError) -> None:
        if error.status_code != 401 or not self._is_session_check(descriptor.url):
            return
        logger.info("Session check rejected the stored token; clearing credentials")
        await self._credentials.clear()

    def _is_session_check(self, url: str) -> bool:
        path = httpx.URL(url).path.rstrip("/")
        return path.endswith(self._session_check_path)

    @staticmethod
    def _transport_reason(error: httpx.TransportError) -> str:
        if isinstance(error, httpx.ConnectError):
            text = str(error).lower()
            if any(marker in text for marker in _DNS_MARKERS):
                return NetworkError.DNS
        return NetworkError.NETWORK

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def _error_from_response(
        self, descriptor: RequestDescriptor, response: httpx.Response
    ) -> ApiError:
        body = self._decode(response)
        error_body = ApiErrorBody.parse(body)
        message = (
            (error_body and error_body.error_message)
            or f"Request failed with status code {response.status_code}"
        )
        return ApiError(
            message,
            status_code=response.status_code,
            method=descriptor.method,
            url=descriptor.url,
            code=error_body.error_code if error_body else None,
            body=body,
        )

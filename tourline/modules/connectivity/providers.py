"""
Platform providers for the connectivity module.

- ManualNetworkInfoProvider / ManualAppStateProvider: the host application
  pushes OS notifications in with emit(); also used in tests
- HttpReachabilityProvider: polls a probe URL with httpx and emits a new
  NetworkState whenever the reading changes
"""

import asyncio
import logging
from typing import Optional

import httpx

from .interfaces import AppStateListener, NetworkListener, Unsubscribe
from .models import AppState, NetworkState

logger = logging.getLogger(__name__)


class ManualNetworkInfoProvider:
    """Network provider fed by the host application."""

    def __init__(self, initial: Optional[NetworkState] = None):
        self._current = initial or NetworkState.online()
        self._listeners: list[NetworkListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def fetch(self) -> NetworkState:
        return self._current

    def subscribe(self, listener: NetworkListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_current(self, state: NetworkState) -> None:
        """Change what fetch() returns without notifying listeners."""
        self._current = state

    async def emit(self, state: NetworkState) -> None:
        """Record a new reading and notify every listener in order."""
        self._current = state
        for listener in list(self._listeners):
            await listener(state)


class ManualAppStateProvider:
    """App-lifecycle provider fed by the host application."""

    def __init__(self):
        self._listeners: list[AppStateListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: AppStateListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def emit(self, state: AppState) -> None:
        for listener in list(self._listeners):
            await listener(state)


class HttpReachabilityProvider:
    """
    Reachability by probing a URL.

    A response of any status below 500 means the internet is reachable.
    A timeout means an interface is up but the internet isn't reachable;
    any other transport failure means there's no usable connection.
    Polling starts with the first subscriber and stops with the last.
    """

    def __init__(
        self,
        url: str,
        interval: float = 15.0,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the provider.

        Args:
            url: Probe URL (should answer quickly, e.g. a 204 endpoint)
            interval: Seconds between polls while subscribed
            timeout: Per-probe timeout in seconds
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self._url = url
        self._interval = interval
        self._timeout = timeout
        self._transport = transport
        self._listeners: list[NetworkListener] = []
        self._last: Optional[NetworkState] = None
        self._task: Optional[asyncio.Task] = None

    async def fetch(self) -> NetworkState:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.head(self._url)
        except httpx.TimeoutException:
            logger.debug(f"Reachability probe to {self._url} timed out")
            return NetworkState(is_connected=True, is_internet_reachable=False, connection_type="unknown")
        except httpx.TransportError as e:
            logger.debug(f"Reachability probe to {self._url} failed: {e}")
            return NetworkState.offline()

        reachable = response.status_code < 500
        return NetworkState(is_connected=True, is_internet_reachable=reachable, connection_type="unknown")

    def subscribe(self, listener: NetworkListener) -> Unsubscribe:
        self._listeners.append(listener)
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._poll())

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
            if not self._listeners and self._task is not None:
                self._task.cancel()
                self._task = None

        return unsubscribe

    async def _poll(self) -> None:
        while True:
            state = await self.fetch()
            if state != self._last:
                self._last = state
                for listener in list(self._listeners):
                    try:
                        await listener(state)
                    except Exception:
                        logger.exception("Network listener failed")
            await asyncio.sleep(self._interval)

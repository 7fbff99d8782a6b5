"""
Connectivity module interfaces.

The monitor consumes two platform collaborators (network reachability and
app lifecycle) and exposes IConnectivityMonitor to data-fetching code.
"""

from typing import Any, Awaitable, Callable, Protocol, runtime_checkable

from .models import AppState, DrainReport, NetworkState

NetworkListener = Callable[[NetworkState], Awaitable[None]]
AppStateListener = Callable[[AppState], Awaitable[None]]
Unsubscribe = Callable[[], None]
DeferredOperation = Callable[[], Awaitable[Any]]


@runtime_checkable
class INetworkInfoProvider(Protocol):
    """Device network-reachability provider."""

    async def fetch(self) -> NetworkState:
        """Take a fresh reachability reading."""
        ...

    def subscribe(self, listener: NetworkListener) -> Unsubscribe:
        """
        Register a listener for network changes.

        Returns:
            A callable that removes the listener
        """
        ...


@runtime_checkable
class IAppStateProvider(Protocol):
    """App-lifecycle provider (foreground/background transitions)."""

    def subscribe(self, listener: AppStateListener) -> Unsubscribe:
        """
        Register a listener for lifecycle changes.

        Returns:
            A callable that removes the listener
        """
        ...


@runtime_checkable
class IConnectivityMonitor(Protocol):
    """
    Interface consumed by any code that wants offline resilience.
    """

    @property
    def is_offline(self) -> bool:
        ...

    async def check_connection(self) -> bool:
        """
        Probe reachability now and update state.

        Returns:
            True if the device is online
        """
        ...

    def add_to_retry_queue(self, operation: DeferredOperation) -> None:
        """Defer an operation until connectivity returns."""
        ...

    async def retry_pending_requests(self) -> DrainReport:
        """Replay every queued operation once, in enqueue order."""
        ...

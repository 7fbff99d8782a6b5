"""
Connectivity monitor implementation.

Single source of truth for "can we reach the network". Every input (network
change, app returning to the foreground, manual check) goes through one
state-apply step, and an offline -> online transition replays the retry queue.
"""

import logging
from typing import Any, Optional

from tourline.modules.api_client.messages import format_error_for_log, is_network_error

from .interfaces import (
    DeferredOperation,
    IAppStateProvider,
    IConnectivityMonitor,
    INetworkInfoProvider,
    NetworkListener,
    Unsubscribe,
)
from .models import AppState, DrainReport, NetworkState
from .exceptions import MonitorAlreadyRunningError

logger = logging.getLogger(__name__)


class ConnectivityMonitor(IConnectivityMonitor):
    """
    Tracks reachability and owns the deferred-operation queue.

    The queue is in-memory only. A drain snapshots and truncates it, then
    replays each operation once, sequentially; failures are logged and
    dropped so repeated network flaps can't loop forever.
    """

    def __init__(
        self,
        network_provider: INetworkInfoProvider,
        app_state_provider: Optional[IAppStateProvider] = None,
    ):
        self._network = network_provider
        self._app_state = app_state_provider
        # Assume online until the first reading arrives
        self._state = NetworkState.online()
        self._queue: list[DeferredOperation] = []
        self._subscriptions: list[Unsubscribe] = []
        self._listeners: list[NetworkListener] = []
        self._running = False

    async def __aenter__(self) -> "ConnectivityMonitor":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.stop()

    @property
    def state(self) -> NetworkState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state.is_connected

    @property
    def is_internet_reachable(self) -> Optional[bool]:
        return self._state.is_internet_reachable

    @property
    def connection_type(self) -> Optional[str]:
        return self._state.connection_type

    @property
    def is_offline(self) -> bool:
        return self._state.is_offline

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Take an initial reading and subscribe to platform events."""
        if self._running:
            raise MonitorAlreadyRunningError()
        self._running = True
        await self.check_connection()
        self._subscriptions.append(self._network.subscribe(self.handle_network_change))
        if self._app_state is not None:
            self._subscriptions.append(self._app_state.subscribe(self.handle_app_state_change))

    def stop(self) -> None:
        """Unsubscribe from platform events. Safe to call more than once."""
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()
        self._running = False

    def subscribe(self, listener: NetworkListener) -> Unsubscribe:
        """Register a listener notified after every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def check_connection(self) -> bool:
        try:
            state = await self._network.fetch()
        except Exception as e:
            logger.error(f"Error checking network connection: {e}")
            return False

        await self._apply_state(state)
        return not state.is_offline

    async def handle_network_change(self, state: NetworkState) -> None:
        logger.info(
            f"Network state changed: connected={state.is_connected}, "
            f"reachable={state.is_internet_reachable}, type={state.connection_type}"
        )
        await self._apply_state(state)

    async def handle_app_state_change(self, app_state: AppState) -> None:
        # Connectivity can change silently while backgrounded
        if app_state is AppState.ACTIVE:
            logger.debug("App became active, checking connection")
            await self.check_connection()

    def add_to_retry_queue(self, operation: DeferredOperation) -> None:
        logger.info(f"Adding request to retry queue ({len(self._queue) + 1} pending)")
        self._queue.append(operation)

    async def retry_pending_requests(self) -> DrainReport:
        if not self._queue:
            return DrainReport()

        pending = self._queue
        self._queue = []
        report = DrainReport(attempted=len(pending))
        logger.info(f"Retrying {len(pending)} pending requests")

        for operation in pending:
            try:
                await operation()
            except Exception as e:
                report.failed += 1
                report.errors.append(format_error_for_log(e))
                logger.warning(f"Deferred request failed and was dropped: {e}")
            else:
                report.succeeded += 1

        logger.info(
            f"Retry queue drained: {report.succeeded} succeeded, {report.failed} failed"
        )
        return report

    async def _apply_state(self, state: NetworkState) -> None:
        was_offline = self._state.is_offline
        self._state = state

        for listener in list(self._listeners):
            try:
                await listener(state)
            except Exception:
                logger.exception("Network listener failed")

        if was_offline and not state.is_offline:
            logger.info("Back online, replaying deferred requests")
            await self.retry_pending_requests()


async def run_or_defer(monitor: IConnectivityMonitor, operation: DeferredOperation) -> Any:
    """
    Run an operation; if it fails for lack of a response, queue it for replay.

    The error is always re-raised so the caller can show it.
    """
    try:
        return await operation()
    except Exception as error:
        if is_network_error(error):
            monitor.add_to_retry_queue(operation)
        raise

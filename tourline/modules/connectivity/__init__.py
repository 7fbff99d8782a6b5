"""
Connectivity module.

Observes device reachability and app-foreground transitions, and replays
deferred operations when the device comes back online.

Public API:
- IConnectivityMonitor / ConnectivityMonitor: State + retry queue
- run_or_defer: Run an operation, deferring it on a network failure
- INetworkInfoProvider, IAppStateProvider: Platform collaborators
- NetworkState, AppState, DrainReport: Data models
"""

from .interfaces import (
    DeferredOperation,
    IAppStateProvider,
    IConnectivityMonitor,
    INetworkInfoProvider,
)
from .models import AppState, DrainReport, NetworkState
from .providers import HttpReachabilityProvider, ManualAppStateProvider, ManualNetworkInfoProvider
from .service import ConnectivityMonitor, run_or_defer
from .exceptions import ConnectivityError, MonitorAlreadyRunningError

__all__ = [
    # Interfaces
    "DeferredOperation",
    "IAppStateProvider",
    "IConnectivityMonitor",
    "INetworkInfoProvider",
    # Models
    "AppState",
    "DrainReport",
    "NetworkState",
    # Implementations
    "ConnectivityMonitor",
    "HttpReachabilityProvider",
    "ManualAppStateProvider",
    "ManualNetworkInfoProvider",
    "run_or_defer",
    # Exceptions
    "ConnectivityError",
    "MonitorAlreadyRunningError",
]

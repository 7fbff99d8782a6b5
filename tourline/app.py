"""
Composition root.

Wires the credential store, API client, connectivity monitor and session
manager together. Each TourlineApp owns one instance of each; hosts create
one and pass it (or its parts) to consumers.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from tourline.shared.config import Settings, get_settings
from tourline.modules.api_client import ApiClient
from tourline.modules.connectivity import (
    ConnectivityMonitor,
    HttpReachabilityProvider,
    IAppStateProvider,
    INetworkInfoProvider,
)
from tourline.modules.credentials import CredentialStore, IKeyValueStorage, JsonFileStorage
from tourline.modules.session import AuthApi, SessionManager


@dataclass
class TourlineApp:
    """The four core components, wired together."""

    settings: Settings
    credentials: CredentialStore
    api: ApiClient
    connectivity: ConnectivityMonitor
    session: SessionManager

    async def start(self) -> None:
        """Start connectivity monitoring, then resolve the stored session."""
        await self.connectivity.start()
        await self.session.bootstrap()

    async def aclose(self) -> None:
        self.connectivity.stop()
        await self.api.aclose()

    async def __aenter__(self) -> "TourlineApp":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[IKeyValueStorage] = None,
    network_provider: Optional[INetworkInfoProvider] = None,
    app_state_provider: Optional[IAppStateProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TourlineApp:
    """
    Build a TourlineApp.

    Args:
        settings: Defaults to get_settings()
        storage: Key/value backend. Defaults to a JSON file at settings.credentials_path.
        network_provider: Defaults to polling settings.reachability_url
        app_state_provider: Optional foreground/background event source
        transport: Optional httpx transport for the API client

    Returns:
        A TourlineApp that has not been started
    """
    settings = settings or get_settings()
    credentials = CredentialStore(storage or JsonFileStorage(settings.credentials_path))
    api = ApiClient(credentials, settings, transport=transport)
    network_provider = network_provider or HttpReachabilityProvider(
        settings.reachability_url,
        interval=settings.reachability_interval,
        timeout=settings.reachability_timeout,
    )
    connectivity = ConnectivityMonitor(network_provider, app_state_provider)
    session = SessionManager(
        credentials,
        AuthApi(api, me_path=settings.session_check_path),
        settings,
    )
    return TourlineApp(
        settings=settings,
        credentials=credentials,
        api=api,
        connectivity=connectivity,
        session=session,
    )

"""Fixtures for connectivity tests."""

import pytest

from tourline.modules.connectivity import (
    ConnectivityMonitor,
    ManualAppStateProvider,
    ManualNetworkInfoProvider,
    NetworkState,
)


@pytest.fixture
def network() -> ManualNetworkInfoProvider:
    return ManualNetworkInfoProvider(NetworkState.online("wifi"))


@pytest.fixture
def app_state() -> ManualAppStateProvider:
    return ManualAppStateProvider()


@pytest.fixture
def monitor(network, app_state) -> ConnectivityMonitor:
    return ConnectivityMonitor(network, app_state)


@pytest.fixture
def calls() -> list:
    return []

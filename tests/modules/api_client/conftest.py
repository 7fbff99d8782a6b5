"""Fixtures for API client tests."""

from unittest.mock import AsyncMock

import pytest

from tourline.modules.api_client import ApiClient, RetryPolicy


@pytest.fixture
def sleep() -> AsyncMock:
    """Backoff sleep that returns immediately and records delays."""
    return AsyncMock(return_value=None)


@pytest.fixture
def fixed_policy() -> RetryPolicy:
    """Retry policy with jitter pinned to its midpoint."""
    return RetryPolicy(max_retries=3, base_delay=1.0, jitter=0.1, random_source=lambda: 0.5)


@pytest.fixture
def make_client(credential_store, settings, sleep, fixed_policy):
    """Factory building an ApiClient around a transport."""

    def factory(transport, store=None, policy=None) -> ApiClient:
        return ApiClient(
            store or credential_store,
            settings,
            policy=policy or fixed_policy,
            transport=transport,
            sleep=sleep,
        )

    return factory

"""Fixtures for session tests."""

from unittest.mock import AsyncMock

import pytest

from tourline.modules.credentials import UserSnapshot
from tourline.modules.session import AuthResult, IAuthApi, SessionManager
from tests.conftest import make_user_payload


@pytest.fixture
def user() -> UserSnapshot:
    return UserSnapshot.from_backend(make_user_payload())


@pytest.fixture
def auth_api(user) -> AsyncMock:
    """IAuthApi double whose calls succeed by default."""
    api = AsyncMock(spec=IAuthApi)
    api.login.return_value = AuthResult(token="new-token", user=user)
    api.register.return_value = AuthResult(token="new-token", user=user)
    api.get_me.return_value = user
    api.forgot_password.return_value = None
    return api


@pytest.fixture
def manager(credential_store, auth_api, settings) -> SessionManager:
    """Manager over an empty store."""
    return SessionManager(credential_store, auth_api, settings)


@pytest.fixture
def seeded_manager(seeded_store, auth_api, settings) -> SessionManager:
    """Manager over a store that already holds a session."""
    return SessionManager(seeded_store, auth_api, settings)

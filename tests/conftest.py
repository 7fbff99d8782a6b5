"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import json
from typing import Any, Callable

import httpx
import pytest

from tourline.shared.config import Settings
from tourline.modules.credentials import CredentialStore, MemoryStorage
from tourline.modules.credentials.service import TOKEN_KEY, USER_KEY


TEST_BASE_URL = "http://api.test/api"


def make_user_payload(
    user_id: str = "user-123",
    email: str = "ana@example.com",
    role: str = "tourist",
    **overrides: Any,
) -> dict[str, Any]:
    """
    Build a backend-shaped (camelCase) user payload.

    Args:
        user_id: User ID
        email: Email address
        role: Backend role spelling
        **overrides: Extra or replacement camelCase fields

    Returns:
        Dict shaped like the backend's user object
    """
    payload = {
        "id": user_id,
        "email": email,
        "firstName": "Ana",
        "lastName": "Rojas",
        "role": role,
        "emailVerified": True,
        "isActive": True,
        "createdAt": "2024-01-10T12:00:00Z",
        "updatedAt": "2024-01-10T12:00:00Z",
    }
    payload.update(overrides)
    return payload


def envelope(data: Any) -> dict[str, Any]:
    """Wrap data in the backend success envelope."""
    return {"success": True, "data": data}


def json_response(status_code: int, body: Any) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(body).encode(), headers={"Content-Type": "application/json"})


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment with test-friendly values."""
    return Settings(
        _env_file=None,
        api_base_url=TEST_BASE_URL,
        request_timeout=1.0,
        retry_base_delay=1.0,
        credentials_path=tmp_path / "credentials.json",
        reachability_url="http://probe.test/generate_204",
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def credential_store(storage) -> CredentialStore:
    return CredentialStore(storage)


@pytest.fixture
def user_payload() -> dict[str, Any]:
    return make_user_payload()


@pytest.fixture
def seeded_storage(user_payload) -> MemoryStorage:
    """Storage that already holds a session for user-123."""
    return MemoryStorage(
        {
            TOKEN_KEY: "stored-token",
            USER_KEY: json.dumps(user_payload),
        }
    )


@pytest.fixture
def seeded_store(seeded_storage) -> CredentialStore:
    return CredentialStore(seeded_storage)

"""
Credential module interfaces.

The credential store depends on IKeyValueStorage, not a concrete backend,
so the host application can plug in its platform keystore. Other modules
should depend on ICredentialStore.
"""

from typing import Iterable, Optional, Protocol, runtime_checkable

from .models import CredentialRecord, UserSnapshot


@runtime_checkable
class IKeyValueStorage(Protocol):
    """
    Durable async key/value storage provider.

    Mirrors the small surface of a mobile key/value store: single reads,
    and batched writes and removals.
    """

    async def get_item(self, key: str) -> Optional[str]:
        """Return the value stored at key, or None."""
        ...

    async def multi_get(self, keys: Iterable[str]) -> dict[str, Optional[str]]:
        """Return a mapping of every requested key to its value (None if absent)."""
        ...

    async def multi_set(self, items: dict[str, str]) -> None:
        """Write every pair in a single operation."""
        ...

    async def multi_remove(self, keys: Iterable[str]) -> None:
        """Remove every key in a single operation. Missing keys are ignored."""
        ...


@runtime_checkable
class ICredentialStore(Protocol):
    """
    Interface for persisting the session credential pair.

    The HTTP client reads the token from here on every request; the session
    manager is the main writer.
    """

    async def get_token(self) -> Optional[str]:
        """Return the stored bearer token, if any."""
        ...

    async def get_user(self) -> Optional[UserSnapshot]:
        """Return the stored user snapshot, if any."""
        ...

    async def load(self) -> Optional[CredentialRecord]:
        """
        Load the full credential record.

        Returns:
            CredentialRecord if both token and user are present, None otherwise
        """
        ...

    async def save(self, record: CredentialRecord) -> None:
        """Persist token and user together."""
        ...

    async def update_user(self, user: UserSnapshot) -> None:
        """
        Replace the stored user snapshot, keeping the token.

        Raises:
            CredentialStoreError: If there is no token to pair the user with
        """
        ...

    async def clear(self) -> None:
        """Remove token and user together."""
        ...

    async def has_credentials(self) -> bool:
        """Return True if a token is stored."""
        ...

"""
Credential store implementation.

Persists the bearer token and the user snapshot under two storage keys that
are always written and removed together.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from .interfaces import ICredentialStore, IKeyValueStorage
from .models import CredentialRecord, UserSnapshot
from .exceptions import MissingTokenError

logger = logging.getLogger(__name__)

TOKEN_KEY = "@tourline_token"
USER_KEY = "@tourline_user"
CREDENTIAL_KEYS = (TOKEN_KEY, USER_KEY)


class CredentialStore(ICredentialStore):
    """
    Credential persistence on top of an IKeyValueStorage.

    A record that is only half present (token without user or vice versa)
    or whose user half cannot be parsed is treated as absent and removed.
    """

    def __init__(self, storage: IKeyValueStorage):
        self._storage = storage

    @property
    def storage(self) -> IKeyValueStorage:
        return self._storage

    async def get_token(self) -> Optional[str]:
        """Read the token. Called on every outbound request."""
        return await self._storage.get_item(TOKEN_KEY)

    async def get_user(self) -> Optional[UserSnapshot]:
        raw = await self._storage.get_item(USER_KEY)
        return self._decode_user(raw)

    async def load(self) -> Optional[CredentialRecord]:
        values = await self._storage.multi_get(CREDENTIAL_KEYS)
        token = values.get(TOKEN_KEY)
        raw_user = values.get(USER_KEY)

        if not token and not raw_user:
            return None

        user = self._decode_user(raw_user)
        if not token or user is None:
            logger.warning("Discarding incomplete stored credentials")
            await self.clear()
            return None

        return CredentialRecord(token=token, user=user)

    async def save(self, record: CredentialRecord) -> None:
        await self._storage.multi_set(
            {
                TOKEN_KEY: record.token,
                USER_KEY: self._encode_user(record.user),
            }
        )
        logger.debug(f"Stored credentials for user {record.user.id}")

    async def update_user(self, user: UserSnapshot) -> None:
        token = await self.get_token()
        if not token:
            raise MissingTokenError()
        await self.save(CredentialRecord(token=token, user=user))

    async def clear(self) -> None:
        await self._storage.multi_remove(CREDENTIAL_KEYS)
        logger.debug("Cleared stored credentials")

    async def has_credentials(self) -> bool:
        return bool(await self.get_token())

    @staticmethod
    def _encode_user(user: UserSnapshot) -> str:
        return user.model_dump_json(by_alias=True, exclude_none=True)

    @staticmethod
    def _decode_user(raw: Optional[str]) -> Optional[UserSnapshot]:
        if not raw:
            return None
        try:
            return UserSnapshot.from_backend(json.loads(raw))
        except (json.JSONDecodeError, TypeError, PydanticValidationError) as e:
            logger.warning(f"Stored user snapshot is unreadable: {e}")
            return None

"""
Credential module.

Durable persistence of the auth token and last-known user snapshot.

Public API:
- ICredentialStore / CredentialStore: Token + user pair persistence
- IKeyValueStorage: Pluggable storage backend (MemoryStorage, JsonFileStorage)
- UserSnapshot, CredentialRecord, Role: Data models
"""

from .interfaces import ICredentialStore, IKeyValueStorage
from .models import CredentialRecord, Role, UserSnapshot, normalize_role
from .service import CredentialStore, TOKEN_KEY, USER_KEY
from .storage import JsonFileStorage, MemoryStorage
from .exceptions import CredentialStoreError, MissingTokenError, StorageWriteError

__all__ = [
    # Interfaces
    "ICredentialStore",
    "IKeyValueStorage",
    # Models
    "CredentialRecord",
    "Role",
    "UserSnapshot",
    "normalize_role",
    # Implementations
    "CredentialStore",
    "JsonFileStorage",
    "MemoryStorage",
    "TOKEN_KEY",
    "USER_KEY",
    # Exceptions
    "CredentialStoreError",
    "MissingTokenError",
    "StorageWriteError",
]

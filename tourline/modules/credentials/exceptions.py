"""
Credential module exceptions.
"""

from tourline.shared.exceptions import TourlineError


class CredentialStoreError(TourlineError):
    """Base exception for credential persistence errors."""

    pass


class StorageWriteError(CredentialStoreError):
    """Raised when the storage backend fails to persist data."""

    def __init__(self, path: str, message: str):
        super().__init__(
            f"Failed to write credentials to {path}: {message}",
            code="STORAGE_WRITE_FAILED",
            details={"path": path, "error": message},
        )


class MissingTokenError(CredentialStoreError):
    """Raised when a user snapshot is written without a token to pair it with."""

    def __init__(self, message: str = "No stored token to pair the user snapshot with"):
        super().__init__(message, code="MISSING_TOKEN")

"""
Centralized configuration for the Tourline client core.

All settings are loaded from environment variables with sensible defaults.
Every variable is namespaced with the TOURLINE_ prefix (e.g., TOURLINE_API_BASE_URL).
"""

from functools import lru_cache
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TOURLINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Tourline"
    app_version: str = "0.1.0"
    debug: bool = False

    # Backend
    api_base_url: str = "http://localhost:3001/api"
    request_timeout: float = 30.0  # seconds
    session_check_path: str = "/auth/me"

    # Retry policy
    max_retries: int = 3
    retry_base_delay: float = 1.0  # seconds
    retry_jitter: float = 0.1  # fraction of the computed delay
    retryable_status_codes: list[int] = [408, 429, 500, 502, 503, 504]

    # Credential persistence
    credentials_path: Path = Path.home() / ".tourline" / "credentials.json"

    # Reachability probing
    reachability_url: str = "https://clients3.google.com/generate_204"
    reachability_interval: float = 15.0  # seconds
    reachability_timeout: float = 5.0  # seconds

    # Session bootstrap
    # When False, any failure of the session check signs the user out,
    # including a network failure while the device is merely offline.
    bootstrap_keep_session_offline: bool = False


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

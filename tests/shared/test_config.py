"""Tests for shared/config.py."""

import os
from pathlib import Path
from unittest.mock import patch

from tourline.shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "Tourline"
        assert settings.debug is False
        assert settings.request_timeout == 30.0
        assert settings.session_check_path == "/auth/me"
        assert settings.bootstrap_keep_session_offline is False

    def test_retry_defaults(self):
        """Three retries from a one second base with 10% jitter."""
        settings = Settings(_env_file=None)
        assert settings.max_retries == 3
        assert settings.retry_base_delay == 1.0
        assert settings.retry_jitter == 0.1
        assert set(settings.retryable_status_codes) == {408, 429, 500, 502, 503, 504}

    def test_loads_from_prefixed_env(self):
        """Settings should load TOURLINE_-prefixed environment variables."""
        with patch.dict(os.environ, {
            "TOURLINE_API_BASE_URL": "https://api.tourline.cl/api",
            "TOURLINE_MAX_RETRIES": "5",
            "TOURLINE_DEBUG": "true",
        }):
            settings = Settings(_env_file=None)
            assert settings.api_base_url == "https://api.tourline.cl/api"
            assert settings.max_retries == 5
            assert settings.debug is True

    def test_unprefixed_env_is_ignored(self):
        """Settings should not pick up unprefixed variables."""
        with patch.dict(os.environ, {"MAX_RETRIES": "9"}):
            settings = Settings(_env_file=None)
            assert settings.max_retries == 3

    def test_credentials_path_is_path(self):
        """credentials_path should be coerced to a Path."""
        with patch.dict(os.environ, {"TOURLINE_CREDENTIALS_PATH": "/tmp/creds.json"}):
            settings = Settings(_env_file=None)
            assert settings.credentials_path == Path("/tmp/creds.json")


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2

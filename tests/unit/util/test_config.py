"""Unit tests for settings."""

import pytest

from relay.config import AuthSettings, Settings
from relay.util.error import ConfigurationError


class TestSettings:
    """Tests for Settings validation."""

    def test_development_defaults(self):
        settings = Settings(environment="development", _env_file=None)

        assert settings.api.base_url == "http://localhost:8000"
        assert settings.fanout.live_send_timeout_seconds == 2.0
        assert settings.fanout.max_page_size == 200

    def test_production_requires_jwt_secret(self):
        with pytest.raises(ConfigurationError):
            Settings(environment="production", _env_file=None)

    def test_production_uses_https(self):
        settings = Settings(
            environment="production",
            host="relay.example.com",
            auth=AuthSettings(jwt_secret="real-secret"),
            _env_file=None,
        )

        assert settings.api.base_url == "https://relay.example.com"

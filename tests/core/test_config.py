"""
Test suite for Settings.
"""

import pytest
from pydantic import ValidationError

from stripe_rest.core import config
from stripe_rest.core.config import Settings, get_settings, stripe_logger


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("STRIPE_API_KEY", "STRIPE_API_BASE_URL", "STRIPE_API_VERSION"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.STRIPE_API_KEY == ""
        assert settings.STRIPE_API_BASE_URL == "https://api.stripe.com"
        assert settings.STRIPE_API_VERSION is None
        assert settings.STRIPE_MAX_ATTEMPTS == 3

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("STRIPE_API_KEY", "sk_test_env")
        monkeypatch.setenv("STRIPE_MAX_ATTEMPTS", "5")

        settings = Settings(_env_file=None)

        assert settings.STRIPE_API_KEY == "sk_test_env"
        assert settings.STRIPE_MAX_ATTEMPTS == 5

    def test_reads_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("STRIPE_API_KEY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("STRIPE_API_KEY=sk_test_dotenv\nUNRELATED=1\n")

        settings = Settings(_env_file=env_file)

        assert settings.STRIPE_API_KEY == "sk_test_dotenv"

    def test_max_attempts_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, STRIPE_MAX_ATTEMPTS=0)

    def test_log_level_is_normalized(self):
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="chatty")


class TestGetSettings:

    def test_is_cached(self):
        assert get_settings() is get_settings()

    def test_stripe_logger_is_configured(self):
        assert stripe_logger.name == "stripe_logger"
        assert stripe_logger.handlers

    def test_no_module_level_settings(self):
        """Test that settings are only reachable through get_settings."""
        assert not hasattr(config, "settings")

# Configuration Tests
"""Tests for environment-driven settings."""

from courier.config import Settings


class TestSettings:
    """Test Settings defaults and overrides."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("COURIER_TIMEOUT", raising=False)
        settings = Settings(_env_file=None)

        assert settings.timeout == 30.0
        assert settings.correlation_header == "X-Correlation-ID"
        assert settings.verify_ssl is True
        assert settings.base_url is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("COURIER_TIMEOUT", "5")
        monkeypatch.setenv("COURIER_CORRELATION_HEADER", "X-Request-ID")
        monkeypatch.setenv("COURIER_VERIFY_SSL", "false")

        settings = Settings(_env_file=None)

        assert settings.timeout == 5.0
        assert settings.correlation_header == "X-Request-ID"
        assert settings.verify_ssl is False

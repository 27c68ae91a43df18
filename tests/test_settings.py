"""
Tests for settings module.

Tests settings validation, environment variable loading and authenticator
selection.
"""
from __future__ import annotations

import pytest

from container_registry.settings import (
    DEFAULT_SERVICE_URL,
    Settings,
    authenticator_from_env,
    create_settings_from_env,
)
from container_registry.transport.authenticators import (
    BasicAuthenticator,
    BearerTokenAuthenticator,
    NoAuthAuthenticator,
)


class TestSettings:
    """Test Settings dataclass validation."""

    def test_minimal_valid_settings(self):
        """Test creating settings with only the account."""
        settings = Settings(account="acct")
        assert settings.account == "acct"
        assert settings.service_url is None
        assert settings.region is None
        assert settings.timeout_s == 60.0
        assert settings.max_retries == 0
        assert settings.retry_interval_s == 1.0
        assert settings.disable_ssl_verification is False

    def test_empty_account_raises(self):
        with pytest.raises(ValueError, match="account is required"):
            Settings(account="")

    def test_invalid_service_url_raises(self):
        with pytest.raises(ValueError, match="Invalid service_url format"):
            Settings(account="acct", service_url="us.icr.io")

        with pytest.raises(ValueError, match="Invalid service_url format"):
            Settings(account="acct", service_url="https://has space.io")

    def test_unknown_region_raises(self):
        with pytest.raises(ValueError, match="Unknown region: mars-1"):
            Settings(account="acct", region="mars-1")

    def test_numeric_validation(self):
        with pytest.raises(ValueError, match="timeout_s must be positive"):
            Settings(account="acct", timeout_s=0)
        with pytest.raises(ValueError, match="max_retries must be non-negative"):
            Settings(account="acct", max_retries=-1)
        with pytest.raises(ValueError, match="retry_interval_s must be positive"):
            Settings(account="acct", retry_interval_s=0)

    def test_settings_are_frozen(self):
        settings = Settings(account="acct")
        with pytest.raises(AttributeError):
            settings.account = "other"  # type: ignore[misc]


class TestResolvedServiceUrl:
    def test_default(self):
        assert Settings(account="acct").resolved_service_url == DEFAULT_SERVICE_URL == "https://icr.io"

    def test_region(self):
        assert Settings(account="acct", region="jp-osa").resolved_service_url == "https://jp2.icr.io"

    def test_explicit_url_wins_over_region(self):
        settings = Settings(account="acct", service_url="https://private.us.icr.io", region="eu-de")
        assert settings.resolved_service_url == "https://private.us.icr.io"


class TestCreateSettingsFromEnv:
    """Test loading settings from environment variables."""

    def test_defaults(self):
        settings = create_settings_from_env()
        assert settings.account == "testString"
        assert settings.resolved_service_url == "https://icr.io"
        assert settings.max_retries == 0

    def test_all_variables(self, monkeypatch):
        monkeypatch.setenv("CONTAINER_REGISTRY_URL", "https://us.icr.io")
        monkeypatch.setenv("CONTAINER_REGISTRY_REGION", "eu-de")
        monkeypatch.setenv("CONTAINER_REGISTRY_TIMEOUT", "15")
        monkeypatch.setenv("CONTAINER_REGISTRY_MAX_RETRIES", "4")
        monkeypatch.setenv("CONTAINER_REGISTRY_RETRY_INTERVAL", "2.5")
        monkeypatch.setenv("CONTAINER_REGISTRY_DISABLE_SSL", "true")

        settings = create_settings_from_env()

        assert settings.service_url == "https://us.icr.io"
        assert settings.region == "eu-de"
        assert settings.timeout_s == 15.0
        assert settings.max_retries == 4
        assert settings.retry_interval_s == 2.5
        assert settings.disable_ssl_verification is True

    def test_missing_account_raises(self, monkeypatch):
        monkeypatch.delenv("CONTAINER_REGISTRY_ACCOUNT")
        with pytest.raises(ValueError, match="CONTAINER_REGISTRY_ACCOUNT environment variable is required"):
            create_settings_from_env()

    def test_empty_url_is_ignored(self, monkeypatch):
        monkeypatch.setenv("CONTAINER_REGISTRY_URL", "")
        assert create_settings_from_env().service_url is None

    def test_invalid_number_raises(self, monkeypatch):
        monkeypatch.setenv("CONTAINER_REGISTRY_MAX_RETRIES", "lots")
        with pytest.raises(ValueError):
            create_settings_from_env()

    def test_fresh_instance_every_call(self, monkeypatch):
        first = create_settings_from_env()
        monkeypatch.setenv("CONTAINER_REGISTRY_REGION", "ca-tor")
        second = create_settings_from_env()
        assert first.region is None
        assert second.resolved_service_url == "https://ca.icr.io"


class TestAuthenticatorFromEnv:
    def test_noauth(self):
        assert isinstance(authenticator_from_env(), NoAuthAuthenticator)

    def test_bearer_token(self, monkeypatch):
        monkeypatch.setenv("CONTAINER_REGISTRY_AUTH_TYPE", "bearerToken")
        monkeypatch.setenv("CONTAINER_REGISTRY_BEARER_TOKEN", "tok")

        authenticator = authenticator_from_env()
        headers = {}
        authenticator.authenticate(headers)

        assert isinstance(authenticator, BearerTokenAuthenticator)
        assert headers["Authorization"] == "Bearer tok"

    def test_bearer_token_missing(self, monkeypatch):
        monkeypatch.setenv("CONTAINER_REGISTRY_AUTH_TYPE", "bearertoken")
        with pytest.raises(ValueError, match="CONTAINER_REGISTRY_BEARER_TOKEN"):
            authenticator_from_env()

    def test_basic(self, monkeypatch):
        monkeypatch.setenv("CONTAINER_REGISTRY_AUTH_TYPE", "basic")
        monkeypatch.setenv("CONTAINER_REGISTRY_USERNAME", "user")
        monkeypatch.setenv("CONTAINER_REGISTRY_PASSWORD", "pass")
        assert isinstance(authenticator_from_env(), BasicAuthenticator)

    def test_basic_missing_password(self, monkeypatch):
        monkeypatch.setenv("CONTAINER_REGISTRY_AUTH_TYPE", "basic")
        monkeypatch.setenv("CONTAINER_REGISTRY_USERNAME", "user")
        with pytest.raises(ValueError, match="required for basic auth"):
            authenticator_from_env()

    def test_unsupported_type(self, monkeypatch):
        monkeypatch.setenv("CONTAINER_REGISTRY_AUTH_TYPE", "iam")
        with pytest.raises(ValueError, match="Unsupported CONTAINER_REGISTRY_AUTH_TYPE: iam"):
            authenticator_from_env()

"""
Settings and configuration for the Container Registry client.

Centralizes configuration values and provides validation with fail-fast behavior.
Loads settings from environment variables at client construction time.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional

from .regions import REGIONAL_ENDPOINTS
from .transport.authenticators import (
    Authenticator,
    BasicAuthenticator,
    BearerTokenAuthenticator,
    NoAuthAuthenticator,
)

__all__ = ["Settings", "DEFAULT_SERVICE_URL", "create_settings_from_env", "authenticator_from_env"]

DEFAULT_SERVICE_URL = "https://icr.io"


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for the Container Registry client.

    Service Settings:
        account: IBM Cloud account ID sent in the Account header (required)
        service_url: Explicit registry API base URL
        region: Region key, used when service_url is not given
        timeout_s: HTTP request timeout in seconds
        max_retries: Number of retries for failed requests (0=no retry)
        retry_interval_s: Upper bound on backoff between retries
        disable_ssl_verification: Skip TLS certificate checks (dev only)
    """
    account: str
    service_url: Optional[str] = None
    region: Optional[str] = None
    timeout_s: float = 60.0
    max_retries: int = 0
    retry_interval_s: float = 1.0
    disable_ssl_verification: bool = False

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.account:
            raise ValueError("account is required")

        if self.service_url is not None:
            if not re.match(r"^https?://[^\s/]+(?:/\S*)?$", self.service_url):
                raise ValueError(f"Invalid service_url format: {self.service_url}")

        if self.region is not None and self.region not in REGIONAL_ENDPOINTS:
            raise ValueError(
                f"Unknown region: {self.region}. "
                f"Expected one of: {', '.join(REGIONAL_ENDPOINTS)}"
            )

        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {self.timeout_s}")

        if self.max_retries < 0:
            raise ValueError(f"max_retries must be non-negative, got {self.max_retries}")

        if self.retry_interval_s <= 0:
            raise ValueError(f"retry_interval_s must be positive, got {self.retry_interval_s}")

    @property
    def resolved_service_url(self) -> str:
        """Explicit URL first, then the region's URL, then the global endpoint."""
        if self.service_url:
            return self.service_url
        if self.region:
            return REGIONAL_ENDPOINTS[self.region]
        return DEFAULT_SERVICE_URL


def _str_to_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes", "on")


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - CONTAINER_REGISTRY_ACCOUNT (required)
        - CONTAINER_REGISTRY_URL (optional)
        - CONTAINER_REGISTRY_REGION (optional)
        - CONTAINER_REGISTRY_TIMEOUT (default: 60.0)
        - CONTAINER_REGISTRY_MAX_RETRIES (default: 0)
        - CONTAINER_REGISTRY_RETRY_INTERVAL (default: 1.0)
        - CONTAINER_REGISTRY_DISABLE_SSL (default: false)

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If configuration is invalid or required values missing

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    def get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        return float(value) if value else default

    def get_int(key: str, default: int) -> int:
        value = os.getenv(key)
        return int(value) if value else default

    account = os.getenv("CONTAINER_REGISTRY_ACCOUNT")
    if not account:
        raise ValueError("CONTAINER_REGISTRY_ACCOUNT environment variable is required")

    return Settings(
        account=account,
        service_url=os.getenv("CONTAINER_REGISTRY_URL") or None,
        region=os.getenv("CONTAINER_REGISTRY_REGION") or None,
        timeout_s=get_float("CONTAINER_REGISTRY_TIMEOUT", 60.0),
        max_retries=get_int("CONTAINER_REGISTRY_MAX_RETRIES", 0),
        retry_interval_s=get_float("CONTAINER_REGISTRY_RETRY_INTERVAL", 1.0),
        disable_ssl_verification=_str_to_bool(os.getenv("CONTAINER_REGISTRY_DISABLE_SSL", "false")),
    )


def authenticator_from_env() -> Authenticator:
    """
    Build an authenticator from environment variables.

    CONTAINER_REGISTRY_AUTH_TYPE selects the scheme:
        - noauth (default)
        - bearertoken: needs CONTAINER_REGISTRY_BEARER_TOKEN
        - basic: needs CONTAINER_REGISTRY_USERNAME and CONTAINER_REGISTRY_PASSWORD

    Raises:
        ValueError: Unknown auth type or missing credential variables
    """
    auth_type = os.getenv("CONTAINER_REGISTRY_AUTH_TYPE", "noauth").strip().lower()

    if auth_type == "noauth":
        return NoAuthAuthenticator()

    if auth_type == "bearertoken":
        token = os.getenv("CONTAINER_REGISTRY_BEARER_TOKEN")
        if not token:
            raise ValueError("CONTAINER_REGISTRY_BEARER_TOKEN is required for bearertoken auth")
        return BearerTokenAuthenticator(token)

    if auth_type == "basic":
        username = os.getenv("CONTAINER_REGISTRY_USERNAME")
        password = os.getenv("CONTAINER_REGISTRY_PASSWORD")
        if not username or not password:
            raise ValueError(
                "CONTAINER_REGISTRY_USERNAME and CONTAINER_REGISTRY_PASSWORD are required for basic auth"
            )
        return BasicAuthenticator(username, password)

    raise ValueError(f"Unsupported CONTAINER_REGISTRY_AUTH_TYPE: {auth_type}")

"""
Request authenticators.

An authenticator adds credentials to the outgoing header dict. Token
acquisition (IAM API key exchange and refresh) is not handled here; a
BearerTokenAuthenticator is given a token that the caller keeps current.
"""
from __future__ import annotations

import base64
from typing import MutableMapping, Protocol, runtime_checkable

__all__ = ["Authenticator", "NoAuthAuthenticator", "BearerTokenAuthenticator", "BasicAuthenticator"]


@runtime_checkable
class Authenticator(Protocol):
    """Protocol for adding credentials to a request."""

    def authenticate(self, headers: MutableMapping[str, str]) -> None:
        ...


class NoAuthAuthenticator:
    """Sends requests without credentials."""

    def authenticate(self, headers: MutableMapping[str, str]) -> None:
        pass


class BearerTokenAuthenticator:
    """Adds "Authorization: Bearer <token>"."""

    def __init__(self, bearer_token: str):
        if not bearer_token:
            raise ValueError("bearer_token is required")
        self.bearer_token = bearer_token

    def set_bearer_token(self, bearer_token: str) -> None:
        """Replace the token, e.g. after the caller refreshed it."""
        if not bearer_token:
            raise ValueError("bearer_token is required")
        self.bearer_token = bearer_token

    def authenticate(self, headers: MutableMapping[str, str]) -> None:
        headers["Authorization"] = f"Bearer {self.bearer_token}"


class BasicAuthenticator:
    """Adds "Authorization: Basic <base64(username:password)>"."""

    def __init__(self, username: str, password: str):
        if not username or not password:
            raise ValueError("username and password are required")
        encoded = base64.b64encode(f"{username}:{password}".encode()).decode()
        self._header = f"Basic {encoded}"

    def authenticate(self, headers: MutableMapping[str, str]) -> None:
        headers["Authorization"] = self._header

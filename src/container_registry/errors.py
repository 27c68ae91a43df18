"""
Container Registry client error classes.

Two kinds of failure reach callers of the service:

- ValidationError: raised locally, before any request is sent, when a
  required parameter is missing or an unrecognized one is supplied.
- ApiException: raised by the transport for anything that went wrong on
  the wire (connection failure, non-2xx status, auth rejection).
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional


class ContainerRegistryError(Exception):
    """Base class for all errors raised by this package."""
    pass


class ValidationError(ContainerRegistryError, ValueError):
    """
    Local parameter validation failed.

    Raised when:
    - One or more required parameters are absent (or None)
    - A parameter name outside the operation's recognized set was passed

    The message always starts with "Missing required parameters" when
    anything required is missing; consumers match on that text.
    """

    def __init__(self, missing: Iterable[str] = (), invalid: Iterable[str] = ()):
        self.missing = tuple(missing)
        self.invalid = tuple(invalid)
        parts = []
        if self.missing:
            parts.append(f"Missing required parameters: {', '.join(self.missing)}")
        if self.invalid:
            parts.append(f"Found invalid parameters: {', '.join(self.invalid)}")
        super().__init__("; ".join(parts) or "Invalid parameters")


class ApiException(ContainerRegistryError):
    """
    Request to the registry API failed.

    Raised when:
    - HTTP status outside 2xx (status holds the code)
    - Network or connection error (status is 0, cause is chained)
    """

    def __init__(self, status: int, message: Optional[str] = None, response: Any = None,
                 headers: Optional[Mapping[str, str]] = None):
        self.status = status
        self.message = message or "Unknown error"
        self.response = response
        self.headers = dict(headers or {})
        super().__init__(f"Error: {self.message}, Status code: {status}")

    @property
    def retryable(self) -> bool:
        """True for throttling, server-side and connection failures."""
        return self.status == 0 or self.status == 429 or self.status >= 500


__all__ = [
    "ContainerRegistryError",
    "ValidationError",
    "ApiException",
]

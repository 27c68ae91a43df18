"""
HTTP transport for the Container Registry API.

Sends RequestDescriptors over an httpx.AsyncClient, maps failures to
ApiException, and optionally retries throttled, server-side and
connection failures with exponential backoff.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..errors import ApiException
from .authenticators import Authenticator, NoAuthAuthenticator
from .base import DetailedResponse, RequestDescriptor, describe

logger = logging.getLogger(__name__)

__all__ = ["HttpxTransport"]


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, ApiException) and exc.retryable


def _error_message(response: httpx.Response) -> str:
    """
    Pull a human-readable message out of an error response.

    Checks, in order: errors[0].message, error, message, errorMessage,
    then falls back to the HTTP reason phrase.
    """
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None

    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            message = errors[0].get("message")
            if message:
                return str(message)
        for key in ("error", "message", "errorMessage"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value

    return response.reason_phrase or f"HTTP {response.status_code}"


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    content_type = response.headers.get("Content-Type", "")
    if "json" in content_type:
        try:
            return response.json()
        except json.JSONDecodeError:
            logger.warning(f"Response declared {content_type} but body is not valid JSON")
    return response.text


class HttpxTransport:
    """
    Transport backed by httpx.AsyncClient.

    Retries are off by default. When enabled, a request is retried on
    429, 5xx and connection failures up to max_retries times, sleeping
    with exponential backoff capped at retry_interval seconds.
    """

    def __init__(self, authenticator: Optional[Authenticator] = None, *,
                 timeout_s: float = 60.0, verify: bool = True,
                 client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the transport.

        Args:
            authenticator: Adds credentials to every request (default: none)
            timeout_s: Per-request timeout in seconds
            verify: Verify TLS certificates
            client: Pre-built client (e.g. wrapping httpx.MockTransport in tests)
        """
        self.authenticator = authenticator or NoAuthAuthenticator()
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_s),
            follow_redirects=True,
            verify=verify,
        )
        self.max_retries = 0
        self.retry_interval = 0.0

    @property
    def retries_enabled(self) -> bool:
        return self.max_retries > 0

    def enable_retries(self, max_retries: int = 4, retry_interval: float = 30.0) -> None:
        if max_retries < 0:
            raise ValueError(f"max_retries must be non-negative, got {max_retries}")
        if retry_interval <= 0:
            raise ValueError(f"retry_interval must be positive, got {retry_interval}")
        self.max_retries = max_retries
        self.retry_interval = retry_interval

    def disable_retries(self) -> None:
        self.max_retries = 0
        self.retry_interval = 0.0

    async def send(self, request: RequestDescriptor) -> DetailedResponse:
        # Snapshot the retry policy so a concurrent toggle only affects later calls
        max_retries, retry_interval = self.max_retries, self.retry_interval
        if max_retries <= 0:
            return await self._send_once(request)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(max_retries + 1),
            wait=wait_exponential(multiplier=1, max=retry_interval),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return await retrying(self._send_once, request)

    async def _send_once(self, request: RequestDescriptor) -> DetailedResponse:
        url = request.render_url()
        headers = httpx.Headers(request.headers)
        self.authenticator.authenticate(headers)

        content = None
        if request.body is not None:
            content = json.dumps(request.body).encode()

        logger.debug(f"Sending {describe(request)}")
        try:
            response = await self.client.request(
                request.method,
                url,
                params=request.query or None,
                headers=headers,
                content=content,
            )
        except httpx.RequestError as e:
            logger.warning(f"Network error for {describe(request)}: {e}")
            raise ApiException(0, f"Network error calling {url}: {e}") from e

        if not response.is_success:
            message = _error_message(response)
            logger.warning(f"{describe(request)} failed with {response.status_code}: {message}")
            raise ApiException(
                response.status_code,
                message,
                response=response,
                headers=dict(response.headers),
            )

        logger.debug(f"{describe(request)} -> {response.status_code}")
        return DetailedResponse(
            result=_decode_body(response),
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

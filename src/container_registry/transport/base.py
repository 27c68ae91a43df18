"""
Transport interfaces for the Container Registry client.

The service class only builds RequestDescriptors; a Transport turns them into
HTTP calls. This boundary keeps the service free of HTTP details and lets
tests substitute a recording fake.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Protocol, runtime_checkable
from urllib.parse import quote

__all__ = ["RequestDescriptor", "DetailedResponse", "Transport", "describe"]


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Everything needed to issue one API request.

    Invariants:
    - url is a path template relative to service_url, e.g. "/api/v1/images/{image}"
    - every "{name}" in url has a matching path_params entry
    - query and body never hold None values
    - body is None when no JSON payload is sent
    """
    method: str
    url: str
    service_url: str = ""
    path_params: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)

    def render_path(self) -> str:
        """Substitute percent-encoded path parameters ("/" included) into url."""
        path = self.url
        for name, value in self.path_params.items():
            path = path.replace("{" + name + "}", quote(str(value), safe=""))
        return path

    def render_url(self) -> str:
        """Absolute request URL (without query string)."""
        return self.service_url.rstrip("/") + self.render_path()


@dataclass
class DetailedResponse:
    """
    Decoded API response.

    result holds the decoded JSON body (dict or list), the raw text for
    non-JSON bodies, or None when the body is empty.
    """
    result: Any = None
    status: int = 200
    status_text: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    def get_result(self) -> Any:
        return self.result

    def get_status_code(self) -> int:
        return self.status

    def get_headers(self) -> Dict[str, str]:
        return self.headers


@runtime_checkable
class Transport(Protocol):
    """Protocol for sending RequestDescriptors."""

    async def send(self, request: RequestDescriptor) -> DetailedResponse:
        """
        Issue the request.

        Returns:
            Decoded response for 2xx statuses

        Raises:
            ApiException: Non-2xx status or network failure
        """
        ...

    def enable_retries(self, max_retries: int = 4, retry_interval: float = 30.0) -> None:
        ...

    def disable_retries(self) -> None:
        ...

    async def aclose(self) -> None:
        ...


def describe(request: RequestDescriptor) -> str:
    """Short "METHOD url" label used in log lines."""
    return f"{request.method} {request.render_url()}"

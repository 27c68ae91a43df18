"""
Fake Transport implementation for testing.

Records every RequestDescriptor it is asked to send and answers with
canned responses, so service tests can assert on exactly what would have
gone over the wire without any network.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from container_registry.transport.base import DetailedResponse, RequestDescriptor

__all__ = ["FakeTransport"]


class FakeTransport:
    """
    In-memory Transport for testing.

    Responses are keyed by (method, url template); unmatched requests get
    the default result. An exception registered with fail_with() is raised
    instead of answering.
    """

    def __init__(self, default_result: Any = None):
        self.requests: List[RequestDescriptor] = []
        self.default_result = default_result
        self._responses: Dict[tuple, DetailedResponse] = {}
        self._error: Optional[BaseException] = None
        self.max_retries = 0
        self.retry_interval = 0.0
        self.closed = False

    def respond(self, method: str, url: str, result: Any = None, status: int = 200,
                headers: Optional[Dict[str, str]] = None) -> None:
        self._responses[(method, url)] = DetailedResponse(
            result=result, status=status, status_text="OK", headers=dict(headers or {}),
        )

    def fail_with(self, error: BaseException) -> None:
        self._error = error

    @property
    def last_request(self) -> RequestDescriptor:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    async def send(self, request: RequestDescriptor) -> DetailedResponse:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        response = self._responses.get((request.method, request.url))
        if response is not None:
            return response
        return DetailedResponse(result=self.default_result, status=200, status_text="OK")

    def enable_retries(self, max_retries: int = 4, retry_interval: float = 30.0) -> None:
        self.max_retries = max_retries
        self.retry_interval = retry_interval

    def disable_retries(self) -> None:
        self.max_retries = 0
        self.retry_interval = 0.0

    async def aclose(self) -> None:
        self.closed = True

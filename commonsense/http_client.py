"""
HTTP client implementations for the Common Sense API client.

This module exposes minimal typed interfaces (`CommonSenseHTTPClient` and
`AsyncCommonSenseHTTPClient`) used by the content mixins, plus concrete
httpx-based adapters.

Notes:
- Adapters only perform GET requests; the catalog API is read-only.
- Adapters never interpret status codes. Every completed exchange is
  returned as an `HTTPResponse`, whatever its status.
- Request-level failures (DNS, connect, timeouts, redirect loops, undecodable
  bodies) are raised as `TransportError` with the httpx exception chained.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import httpx


class TransportError(RuntimeError):
    """Raised when a request fails before any HTTP status is received."""


@dataclass(frozen=True)
class HTTPResponse:
    """
    A completed HTTP exchange.

    Attributes:
        status_code:
            The HTTP status code.
        reason:
            The status text sent by the server (e.g. "Not Found").
        text:
            The decoded response body.
    """

    status_code: int
    reason: str
    text: str


class CommonSenseHTTPClient:
    """
    Minimal blocking HTTP client interface used by `ContentMixin`.
    """

    def get(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> HTTPResponse:
        raise NotImplementedError("CommonSenseHTTPClient.get must be implemented by the runtime client")

    def close(self) -> None:
        pass


class AsyncCommonSenseHTTPClient:
    """
    Minimal asyncio HTTP client interface used by `AsyncContentMixin`.
    """

    async def get(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> HTTPResponse:
        raise NotImplementedError("AsyncCommonSenseHTTPClient.get must be implemented by the runtime client")

    async def aclose(self) -> None:
        pass


def _to_response(resp: httpx.Response) -> HTTPResponse:
    return HTTPResponse(status_code=resp.status_code, reason=resp.reason_phrase, text=resp.text)


def _timeout_kwargs(timeout: Optional[float]) -> dict:
    # httpx treats timeout=None as "no timeout", so only forward explicit values.
    return {} if timeout is None else {"timeout": timeout}


# Concrete httpx adapters ---------------------------------------------------

class HttpxCommonSenseHTTPClient(CommonSenseHTTPClient):
    """
    Synchronous httpx-based implementation of CommonSenseHTTPClient.

    Example:
        http = HttpxCommonSenseHTTPClient(timeout=5.0)
        resp = http.get("https://api.commonsense.org/v3/education/products?limit=10&page=1",
                        headers={"client-id": "...", "app-id": "..."})
        http.close()

    A preconfigured `httpx.Client` may be passed in (tests use this to
    install an `httpx.MockTransport`).
    """

    def __init__(
        self,
        timeout: Optional[float] = 10.0,
        *,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def get(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> HTTPResponse:
        try:
            resp = self._client.get(url, headers=dict(headers or {}), **_timeout_kwargs(timeout))
        except httpx.RequestError as exc:
            raise TransportError(f"Failed to reach {url}: {exc}") from exc
        return _to_response(resp)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpxCommonSenseHTTPClient":
        return self

    def __exit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Optional[Any]) -> None:
        self.close()


class AsyncHttpxCommonSenseHTTPClient(AsyncCommonSenseHTTPClient):
    """
    Asynchronous httpx-based implementation of AsyncCommonSenseHTTPClient.

    Each `get` suspends at the network boundary and resumes once, with either
    an `HTTPResponse` or a `TransportError`.
    """

    def __init__(
        self,
        timeout: Optional[float] = 10.0,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def get(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> HTTPResponse:
        try:
            resp = await self._client.get(url, headers=dict(headers or {}), **_timeout_kwargs(timeout))
        except httpx.RequestError as exc:
            raise TransportError(f"Failed to reach {url}: {exc}") from exc
        return _to_response(resp)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpxCommonSenseHTTPClient":
        return self

    async def __aexit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Optional[Any]) -> None:
        await self.aclose()


__all__ = [
    "HTTPResponse",
    "TransportError",
    "CommonSenseHTTPClient",
    "AsyncCommonSenseHTTPClient",
    "HttpxCommonSenseHTTPClient",
    "AsyncHttpxCommonSenseHTTPClient",
]

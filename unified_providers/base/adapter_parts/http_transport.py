"""Raw-HTTP transport helpers for adapters that do not use a vendor SDK.

OpenRouter, Mistral and Cohere are reached with ``httpx`` directly. The mixin
below resolves the client (injected or pooled), attaches credentials and
static headers, and turns error statuses into ``httpx.HTTPStatusError`` with
the body already read so :func:`wrap_exception` can extract the vendor error
type.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from ..http import get_httpx_client


async def raise_for_status(response: httpx.Response) -> None:
    """Read the body of an error response, then raise ``HTTPStatusError``."""
    if response.status_code >= 400:
        await response.aread()
        response.raise_for_status()


class HttpTransportMixin:
    """Mixin offering JSON POST/GET and line streaming over ``httpx``.

    Consumers must define ``_base_url``, ``_api_key``, ``_headers``,
    ``_timeout_seconds`` and ``name``, and may set ``_http_client`` to inject
    a client (tests use ``httpx.MockTransport``).
    """

    _http_client: Optional[httpx.AsyncClient] = None

    def _http(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(self._base_url, self.name)  # type: ignore[attr-defined]

    def _auth_headers(self) -> Dict[str, str]:
        key = self._api_key  # type: ignore[attr-defined]
        return {"Authorization": f"Bearer {key}"} if key else {}

    def _request_headers(self, *, stream: bool = False) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if stream:
            headers["Accept"] = "text/event-stream"
        headers |= self._auth_headers()
        headers |= self._headers  # type: ignore[attr-defined]
        return headers

    def _timeout(self) -> Any:
        seconds = self._timeout_seconds  # type: ignore[attr-defined]
        return httpx.Timeout(seconds) if seconds else httpx.USE_CLIENT_DEFAULT

    async def _post_json(self, path: str, payload: Dict[str, Any]) -> Any:
        response = await self._http().post(path, json=payload, headers=self._request_headers(), timeout=self._timeout())
        await raise_for_status(response)
        return response.json()

    async def _get_json(self, path: str) -> Any:
        response = await self._http().get(path, headers=self._request_headers(), timeout=self._timeout())
        await raise_for_status(response)
        return response.json()

    @asynccontextmanager
    async def _stream_lines(self, path: str, payload: Dict[str, Any]) -> AsyncIterator[AsyncIterator[str]]:
        """POST ``payload`` and yield the response's line iterator.

        The response is closed when the context exits, including when the
        consumer abandons the stream.
        """
        async with self._http().stream(
            "POST",
            path,
            json=payload,
            headers=self._request_headers(stream=True),
            timeout=self._timeout(),
        ) as response:
            await raise_for_status(response)
            yield response.aiter_lines()


__all__ = ["HttpTransportMixin", "raise_for_status"]

"""Shared fakes for adapter and streaming tests."""

from __future__ import annotations

import json
from typing import Any, AsyncIterator, Callable, Iterable, List

import httpx


async def async_iter(items: Iterable[Any]) -> AsyncIterator[Any]:
    for item in items:
        yield item


async def collect(chunks: AsyncIterator[Any]) -> List[Any]:
    return [c async for c in chunks]


def sse_body(*events: Any, done: bool = True) -> bytes:
    """Encode events as an SSE body, ending with ``[DONE]`` by default."""
    lines = [f"data: {json.dumps(e)}\n\n" for e in events]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def ndjson_body(*events: Any) -> bytes:
    return "".join(json.dumps(e) + "\n" for e in events).encode("utf-8")


def mock_client(handler: Callable[[httpx.Request], httpx.Response], base_url: str = "") -> httpx.AsyncClient:
    """Return an ``AsyncClient`` whose requests are answered by ``handler``."""
    if base_url:
        return httpx.AsyncClient(base_url=base_url, transport=httpx.MockTransport(handler))
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TrackingStream(httpx.AsyncByteStream):
    """Response body that yields ``parts`` one by one and records closing."""

    def __init__(self, parts: Iterable[bytes]) -> None:
        self.parts = list(parts)
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for part in self.parts:
            yield part

    async def aclose(self) -> None:
        self.closed = True


class FakeSdkStream:
    """Async-iterable stand-in for an SDK stream object with ``close()``."""

    def __init__(self, events: Iterable[Any]) -> None:
        self.events = list(events)
        self.closed = False

    def __aiter__(self) -> AsyncIterator[Any]:
        return self._gen()

    async def _gen(self) -> AsyncIterator[Any]:
        for event in self.events:
            yield event

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Controllable clock whose ``sleep`` records waits and advances time."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

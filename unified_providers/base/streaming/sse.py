"""Wire-level stream decoding for raw-HTTP adapters.

``iter_sse_json`` implements enough of the Server-Sent Events format for
chat-completions style APIs: ``data:`` lines are buffered until a blank line
dispatches the event, ``:`` comment lines (OpenRouter keep-alives) and
``event:``/``id:`` fields are ignored, and a ``[DONE]`` payload ends the
stream. ``iter_ndjson`` decodes newline-delimited JSON (Cohere v1 streams).

Undecodable payloads are skipped, not raised.
"""
from __future__ import annotations

import json
from typing import Any, AsyncIterable, AsyncIterator, List, Optional, Union

DONE = "[DONE]"


def _as_text(line: Union[str, bytes]) -> str:
    return line.decode("utf-8") if isinstance(line, bytes) else str(line)


def _decode(payload: str) -> Optional[Any]:
    try:
        return json.loads(payload)
    except ValueError:
        return None


def parse_sse_line(line: Union[str, bytes]) -> Optional[str]:
    """Return the payload of a single ``data:`` line, else ``None``."""
    text = _as_text(line).rstrip("\r\n")
    if not text.startswith("data:"):
        return None
    payload = text[5:]
    return payload[1:] if payload.startswith(" ") else payload


async def iter_sse_json(lines: AsyncIterable[Union[str, bytes]]) -> AsyncIterator[Any]:
    """Yield decoded JSON events from an async iterable of SSE lines."""
    buffer: List[str] = []
    async for raw in lines:
        text = _as_text(raw).rstrip("\r\n")
        if text == "":
            if buffer:
                payload = "\n".join(buffer)
                buffer = []
                if payload.strip() == DONE:
                    return
                event = _decode(payload)
                if event is not None:
                    yield event
            continue
        if text.startswith(":"):
            continue
        data = parse_sse_line(text)
        if data is not None:
            buffer.append(data)
    if buffer:
        payload = "\n".join(buffer)
        if payload.strip() != DONE:
            event = _decode(payload)
            if event is not None:
                yield event


async def iter_ndjson(lines: AsyncIterable[Union[str, bytes]]) -> AsyncIterator[Any]:
    """Yield decoded JSON objects from newline-delimited JSON lines."""
    async for raw in lines:
        text = _as_text(raw).strip()
        if not text:
            continue
        event = _decode(text)
        if event is not None:
            yield event


__all__ = ["DONE", "parse_sse_line", "iter_sse_json", "iter_ndjson"]

"""Event-typed stream reconstruction (Cohere v1 chat family).

Dispatch is on ``event_type``:

* ``stream-start`` – adopts ``generation_id`` as the response id.
* ``text-generation`` – text delta.
* ``tool-calls-chunk`` – ``tool_call_delta`` fragments keyed by ``index``;
  accumulated like the index-addressed family and, like it, never finalized
  by the engine. The terminal chunk carries the partial calls.
* ``tool-calls-generation`` – the vendor's own completed calls, passed
  through as ``ToolCall``s.
* ``stream-end`` – finish reason and billed usage; terminal chunk.

Unknown event types (citations, search results) are skipped.
"""
from __future__ import annotations

from typing import Any, AsyncIterable, AsyncIterator, Callable, List, Mapping, Optional

from ..models import CompletionChunk, FinishReason, TokenUsage, ToolCall, ToolCallDelta, map_finish_reason
from ..utils import coerce_arguments, get_field, get_list, new_id
from .state import StreamState


async def reconstruct_event_stream(
    events: AsyncIterable[Any],
    *,
    provider: str,
    finish_reasons: Mapping[str, FinishReason],
    usage_parser: Callable[[Any], Optional[TokenUsage]],
) -> AsyncIterator[CompletionChunk]:
    """Turn Cohere stream events into unified chunks.

    ``usage_parser`` receives the ``stream-end`` event's ``response`` object.
    """
    state = StreamState(provider)
    async for event in events:
        kind = get_field(event, "event_type")
        if kind == "stream-start":
            state.adopt_id(get_field(event, "generation_id"))
        elif kind == "text-generation":
            text = get_field(event, "text", "")
            if text:
                yield state.chunk(text)
        elif kind == "tool-calls-chunk":
            raw = get_field(event, "tool_call_delta")
            if raw is None:
                continue
            index = int(get_field(raw, "index", 0))
            item = ToolCallDelta(
                index=index,
                name=get_field(raw, "name"),
                arguments=get_field(raw, "parameters", "") or "",
            )
            state.accumulate(index, name=item.name, fragment=item.arguments)
            yield state.chunk(tool_call_deltas=[item])
        elif kind == "tool-calls-generation":
            calls: List[ToolCall] = [
                ToolCall(
                    id=get_field(raw, "id") or new_id("call"),
                    name=get_field(raw, "name", ""),
                    arguments=coerce_arguments(get_field(raw, "parameters")),
                )
                for raw in get_list(event, "tool_calls")
            ]
            if calls:
                yield state.chunk(tool_calls=calls)
        elif kind == "stream-end":
            response = get_field(event, "response")
            state.adopt_id(get_field(response, "generation_id"))
            state.finish_reason = map_finish_reason(finish_reasons, get_field(event, "finish_reason"))
            state.usage = usage_parser(response)
            yield state.terminal(include_partials=True)
            return
    if not state.terminated:
        yield state.terminal(include_partials=True)


__all__ = ["reconstruct_event_stream"]

"""Index-addressed stream reconstruction (OpenAI chat-completions family).

Used by the OpenAI, OpenRouter, GitHub Copilot and Mistral adapters. Each
event may carry ``choices[0].delta.tool_calls[*]`` fragments keyed by an
integer ``index``; ``id`` and ``function.name`` arrive once and
``function.arguments`` arrives piecewise. The engine surfaces each fragment
as a :class:`ToolCallDelta` and concatenates the text per index, but this
event shape has no per-call completion event, so it never emits a completed
``ToolCall``. The terminal chunk carries the accumulated
:class:`PartialToolCall` entries; parsing them is the caller's job (see
:func:`finalize_partial_tool_calls`).

The terminal chunk is emitted when the upstream iterator is exhausted rather
than on the first ``finish_reason``: with ``stream_options.include_usage`` the
usage arrives in a trailing event that has no choices.
"""
from __future__ import annotations

import json
from typing import Any, AsyncIterable, AsyncIterator, Callable, List, Mapping, Optional

from ..errors import ProviderError
from ..models import CompletionChunk, FinishReason, TokenUsage, ToolCallDelta, map_finish_reason
from ..utils import get_field, get_list
from .state import StreamState


UsageParser = Callable[[Any], Optional[TokenUsage]]


def _fragment_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # Mistral occasionally sends arguments as an already-decoded object.
    return json.dumps(value, ensure_ascii=False)


def _tool_call_deltas(state: StreamState, delta: Any) -> List[ToolCallDelta]:
    out: List[ToolCallDelta] = []
    for position, raw in enumerate(get_list(delta, "tool_calls")):
        index = int(get_field(raw, "index", position))
        fn = get_field(raw, "function")
        item = ToolCallDelta(
            index=index,
            id=get_field(raw, "id"),
            name=get_field(fn, "name"),
            arguments=_fragment_text(get_field(fn, "arguments")),
        )
        state.accumulate(index, id=item.id, name=item.name, fragment=item.arguments)
        out.append(item)
    return out


async def reconstruct_index_stream(
    events: AsyncIterable[Any],
    *,
    provider: str,
    finish_reasons: Mapping[str, FinishReason],
    usage_parser: UsageParser,
) -> AsyncIterator[CompletionChunk]:
    """Turn chat-completions chunk events into unified chunks.

    Parameters:
        events: Vendor chunk objects or decoded SSE dicts, in transport order.
        provider: Provider key (for ids and diagnostics).
        finish_reasons: The vendor's finish-reason table.
        usage_parser: Converts the vendor ``usage`` object to ``TokenUsage``.

    Yields:
        Non-terminal chunks for every event carrying text or tool-call
        fragments, then exactly one terminal chunk.
    """
    state = StreamState(provider)
    async for event in events:
        error = get_field(event, "error")
        if error:
            # raw-HTTP vendors report mid-stream failures as an error event
            raise ProviderError(
                code=str(get_field(error, "type") or get_field(error, "code") or "stream_error"),
                message=str(get_field(error, "message", "stream error")),
                provider=provider,
            )
        state.adopt_id(get_field(event, "id"))
        raw_usage = get_field(event, "usage")
        if raw_usage is not None:
            state.usage = usage_parser(raw_usage)
        choices = get_list(event, "choices")
        if not choices:
            continue
        choice = choices[0]
        delta = get_field(choice, "delta")
        text = get_field(delta, "content", "") or ""
        if not isinstance(text, str):
            text = ""
        deltas = _tool_call_deltas(state, delta)
        reason = get_field(choice, "finish_reason")
        if reason is not None:
            state.finish_reason = map_finish_reason(finish_reasons, reason)
        if text or deltas:
            yield state.chunk(text, tool_call_deltas=deltas)
    yield state.terminal(include_partials=True)


__all__ = ["reconstruct_index_stream", "UsageParser"]

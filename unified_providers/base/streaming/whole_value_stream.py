"""Whole-value stream reconstruction (Google Gemini family).

Gemini streams full ``GenerateContentResponse`` objects. A function-call
part always arrives complete inside one event, so calls pass straight
through with no accumulation. The candidate's ``finish_reason`` marks the
terminal event; usage metadata rides on the same event.
"""
from __future__ import annotations

from typing import Any, AsyncIterable, AsyncIterator, Callable, List, Mapping, Optional, Tuple

from ..models import CompletionChunk, FinishReason, TokenUsage, ToolCall, map_finish_reason
from ..utils import coerce_arguments, get_field, get_list, get_path, new_id
from .state import StreamState

# proto enums report "unset" as 0 / FINISH_REASON_UNSPECIFIED
_UNSET_REASONS = (0, "0", "FINISH_REASON_UNSPECIFIED", "")


def finish_reason_of(candidate: Any) -> Any:
    reason = get_field(candidate, "finish_reason")
    if reason is None:
        return None
    name = getattr(reason, "name", reason)
    return None if name in _UNSET_REASONS or reason in _UNSET_REASONS else name


def split_parts(candidate: Any) -> Tuple[str, List[ToolCall]]:
    """Return the candidate's concatenated text and complete function calls."""
    texts: List[str] = []
    calls: List[ToolCall] = []
    for part in get_list(get_field(candidate, "content"), "parts"):
        if get_field(part, "thought"):
            continue
        fn = get_field(part, "function_call")
        if fn is not None and get_field(fn, "name"):
            calls.append(
                ToolCall(
                    id=get_field(fn, "id") or new_id("call"),
                    name=get_field(fn, "name"),
                    arguments=coerce_arguments(get_field(fn, "args")),
                )
            )
            continue
        text = get_field(part, "text")
        if text:
            texts.append(text)
    return "".join(texts), calls


async def reconstruct_whole_value_stream(
    events: AsyncIterable[Any],
    *,
    provider: str,
    finish_reasons: Mapping[str, FinishReason],
    usage_parser: Callable[[Any], Optional[TokenUsage]],
) -> AsyncIterator[CompletionChunk]:
    """Turn Gemini streamed responses into unified chunks."""
    state = StreamState(provider)
    async for event in events:
        state.adopt_id(get_field(event, "response_id"))
        metadata = get_field(event, "usage_metadata")
        if metadata is not None:
            state.usage = usage_parser(metadata)
        candidates = get_list(event, "candidates")
        if not candidates:
            if get_path(event, "prompt_feedback", "block_reason"):
                state.finish_reason = "content_filter"
                yield state.terminal()
                return
            continue
        candidate = candidates[0]
        text, calls = split_parts(candidate)
        reason = finish_reason_of(candidate)
        if reason is not None:
            state.finish_reason = map_finish_reason(finish_reasons, reason)
            yield state.terminal(text, tool_calls=calls)
            return
        if text or calls:
            yield state.chunk(text, tool_calls=calls)
    if not state.terminated:
        yield state.terminal()


__all__ = ["reconstruct_whole_value_stream", "split_parts", "finish_reason_of"]

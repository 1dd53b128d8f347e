"""Block-addressed stream reconstruction (Anthropic Messages family).

Event handling:

* ``message_start`` – response id and prompt-side usage.
* ``content_block_start`` – a ``tool_use`` block opens an accumulator keyed
  by the block index, holding the block's id and name.
* ``content_block_delta`` – ``text_delta`` yields text; ``input_json_delta``
  appends ``partial_json`` to the open accumulator.
* ``content_block_stop`` – closes the accumulator, parses the concatenated
  JSON and yields exactly one completed ``ToolCall``. Malformed JSON becomes
  ``{}`` so already-delivered output is kept.
* ``message_delta`` – stop reason and cumulative output tokens.
* ``message_stop`` – terminal chunk.
* ``error`` – raised as a ``ProviderError`` carrying the vendor error type.
"""
from __future__ import annotations

from typing import Any, AsyncIterable, AsyncIterator, Callable, Mapping, Optional

from ..errors import ProviderError
from ..models import CompletionChunk, FinishReason, TokenUsage, map_finish_reason
from ..utils import get_field, get_path
from .state import StreamState


def _usage(prompt_side: Any, output_tokens: Optional[int]) -> TokenUsage:
    return TokenUsage.of(
        get_field(prompt_side, "input_tokens", 0),
        output_tokens,
        cached=get_field(prompt_side, "cache_read_input_tokens"),
    )


async def reconstruct_block_stream(
    events: AsyncIterable[Any],
    *,
    provider: str,
    finish_reasons: Mapping[str, FinishReason],
    on_reasoning: Optional[Callable[[str], None]] = None,
) -> AsyncIterator[CompletionChunk]:
    """Turn Anthropic raw stream events into unified chunks.

    ``on_reasoning`` receives ``thinking_delta`` text when extended thinking
    is enabled; reasoning is not part of the chunk text.
    """
    state = StreamState(provider)
    prompt_usage: Any = None
    output_tokens: Optional[int] = None
    async for event in events:
        kind = get_field(event, "type")
        if kind == "message_start":
            message = get_field(event, "message")
            state.adopt_id(get_field(message, "id"))
            prompt_usage = get_field(message, "usage")
            output_tokens = get_field(prompt_usage, "output_tokens")
        elif kind == "content_block_start":
            block = get_field(event, "content_block")
            index = get_field(event, "index", 0)
            block_type = get_field(block, "type")
            if block_type in ("tool_use", "server_tool_use"):
                state.accumulate(index, id=get_field(block, "id"), name=get_field(block, "name"))
            elif block_type == "text" and get_field(block, "text"):
                yield state.chunk(get_field(block, "text"))
        elif kind == "content_block_delta":
            delta = get_field(event, "delta")
            delta_type = get_field(delta, "type")
            if delta_type == "text_delta":
                text = get_field(delta, "text", "")
                if text:
                    yield state.chunk(text)
            elif delta_type == "input_json_delta":
                index = get_field(event, "index", 0)
                if index in state.accumulators:
                    state.accumulate(index, fragment=get_field(delta, "partial_json", ""))
            elif delta_type == "thinking_delta" and on_reasoning is not None:
                on_reasoning(get_field(delta, "thinking", ""))
        elif kind == "content_block_stop":
            call = state.close_block(get_field(event, "index", 0))
            if call is not None:
                yield state.chunk(tool_calls=[call])
        elif kind == "message_delta":
            reason = get_path(event, "delta", "stop_reason")
            if reason is not None:
                state.finish_reason = map_finish_reason(finish_reasons, reason)
            delta_usage = get_field(event, "usage")
            if delta_usage is not None:
                output_tokens = get_field(delta_usage, "output_tokens", output_tokens)
        elif kind == "message_stop":
            state.usage = _usage(prompt_usage, output_tokens)
            yield state.terminal()
            return
        elif kind == "error":
            error = get_field(event, "error")
            raise ProviderError(
                code=get_field(error, "type", "stream_error"),
                message=get_field(error, "message", "stream error"),
                provider=provider,
            )
    if not state.terminated:
        if prompt_usage is not None or output_tokens is not None:
            state.usage = _usage(prompt_usage, output_tokens)
        yield state.terminal()


__all__ = ["reconstruct_block_stream"]

"""Caller-side completion of index-addressed tool calls.

Index-addressed streams (OpenAI family, Mistral, Cohere chunks) end with
``partial_tool_calls`` on the terminal chunk instead of parsed calls. These
helpers turn them, or a whole consumed stream, into completed values.
"""
from __future__ import annotations

from typing import AsyncIterable, List, Optional, Sequence

from ..models import CompletionChunk, CompletionResponse, PartialToolCall, TokenUsage, ToolCall
from ..utils import new_id, parse_arguments


def finalize_partial_tool_calls(partials: Optional[Sequence[PartialToolCall]]) -> List[ToolCall]:
    """Parse accumulated partial calls into ``ToolCall``s.

    Argument text that is empty or not a JSON object becomes ``{}``. Calls
    with neither an id nor a name are dropped as noise.
    """
    calls: List[ToolCall] = []
    for partial in sorted(partials or [], key=lambda p: p.index):
        if not partial.id and not partial.name:
            continue
        calls.append(
            ToolCall(
                id=partial.id or new_id("call"),
                name=partial.name or "",
                arguments=parse_arguments(partial.arguments_text),
            )
        )
    return calls


async def collect_stream(chunks: AsyncIterable[CompletionChunk], *, model: str = "") -> CompletionResponse:
    """Consume a unified chunk stream into a single ``CompletionResponse``.

    Completed tool calls from any chunk are kept in order; partial calls on
    the terminal chunk are finalized and appended after them.
    """
    text: List[str] = []
    tool_calls: List[ToolCall] = []
    terminal: Optional[CompletionChunk] = None
    response_id = ""
    async for chunk in chunks:
        response_id = response_id or chunk.id
        if chunk.delta:
            text.append(chunk.delta)
        if chunk.tool_calls:
            tool_calls.extend(chunk.tool_calls)
        if chunk.finished:
            terminal = chunk
    if terminal is not None and terminal.partial_tool_calls:
        tool_calls.extend(finalize_partial_tool_calls(terminal.partial_tool_calls))
    return CompletionResponse(
        id=response_id or new_id("chatcmpl"),
        content="".join(text),
        model=model,
        usage=(terminal.usage if terminal is not None and terminal.usage else TokenUsage()),
        finish_reason=(terminal.finish_reason if terminal is not None and terminal.finish_reason else "stop"),
        tool_calls=tool_calls or None,
    )


__all__ = ["finalize_partial_tool_calls", "collect_stream"]

"""
CompletionChunk DTO yielded by streaming reconstruction engines.

A stream is zero or more non-terminal chunks followed by exactly one chunk
with ``finished=True``. Usage is only legal on that terminal chunk and the
constructor rejects anything else.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .completion_response import FinishReason
from .token_usage import TokenUsage
from .tool_call import PartialToolCall, ToolCall, ToolCallDelta


@dataclass
class CompletionChunk:
    """One unified streaming increment.

    Attributes:
        id: Stream/response id shared by all chunks of one call.
        delta: Incremental text (may be empty for control chunks).
        finished: True on the single terminal chunk.
        tool_calls: Completed tool calls delivered by this chunk.
        tool_call_deltas: Raw index-addressed fragments carried by this chunk.
        partial_tool_calls: Accumulated unparsed index-addressed calls
            (terminal chunk of index-addressed streams only).
        usage: Token usage (terminal chunk only).
        finish_reason: Normalized finish reason (terminal chunk only).
    """

    id: str
    delta: str = ""
    finished: bool = False
    tool_calls: Optional[List[ToolCall]] = None
    tool_call_deltas: Optional[List[ToolCallDelta]] = None
    partial_tool_calls: Optional[List[PartialToolCall]] = None
    usage: Optional[TokenUsage] = None
    finish_reason: Optional[FinishReason] = None

    def __post_init__(self) -> None:
        if self.usage is not None and not self.finished:
            raise ValueError("usage may only be attached to the terminal chunk")


__all__ = ["CompletionChunk"]

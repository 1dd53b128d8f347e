"""Call-scoped streaming state.

Every reconstruction engine creates exactly one :class:`StreamState` inside
its generator body, so the accumulator map lives and dies with one streaming
call. Nothing here is ever stored on an adapter instance.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from ..models import (
    CompletionChunk,
    FinishReason,
    PartialToolCall,
    TokenUsage,
    ToolCall,
    ToolCallDelta,
)
from ..utils import new_id, parse_arguments

AccumulatorKey = Union[int, str]


@dataclass
class ToolCallAccumulator:
    """In-progress tool call: ``{id, name, partial argument text}``."""

    id: Optional[str] = None
    name: Optional[str] = None
    arguments_text: str = ""

    def merge(self, *, id: Optional[str] = None, name: Optional[str] = None, fragment: str = "") -> None:
        if id and not self.id:
            self.id = id
        if name and not self.name:
            self.name = name
        if fragment:
            self.arguments_text += fragment


class StreamState:
    """Mutable bookkeeping for one streaming call.

    Tracks the response id, tool-call accumulators keyed by event-local index
    or block id, the latest finish reason and usage, and whether the single
    terminal chunk has been produced.
    """

    def __init__(self, provider: str, response_id: Optional[str] = None) -> None:
        self.provider = provider
        self.response_id = response_id
        self.accumulators: Dict[AccumulatorKey, ToolCallAccumulator] = {}
        self.finish_reason: Optional[FinishReason] = None
        self.usage: Optional[TokenUsage] = None
        self.terminated = False

    # ---- identity ----
    def adopt_id(self, candidate: Optional[str]) -> None:
        """Take the vendor's response id the first time one is seen."""
        if candidate and not self.response_id:
            self.response_id = str(candidate)

    @property
    def chunk_id(self) -> str:
        if not self.response_id:
            self.response_id = new_id("chatcmpl")
        return self.response_id

    # ---- accumulators ----
    def accumulate(
        self,
        key: AccumulatorKey,
        *,
        id: Optional[str] = None,
        name: Optional[str] = None,
        fragment: str = "",
    ) -> ToolCallAccumulator:
        acc = self.accumulators.get(key)
        if acc is None:
            acc = ToolCallAccumulator()
            self.accumulators[key] = acc
        acc.merge(id=id, name=name, fragment=fragment)
        return acc

    def close_block(self, key: AccumulatorKey) -> Optional[ToolCall]:
        """Close the accumulator at ``key`` and return its parsed tool call.

        Malformed argument JSON yields ``{}`` arguments. Returns ``None`` when
        no accumulator is open under ``key`` (e.g. a text block).
        """
        acc = self.accumulators.pop(key, None)
        if acc is None:
            return None
        return ToolCall(
            id=acc.id or new_id("call"),
            name=acc.name or "",
            arguments=parse_arguments(acc.arguments_text),
        )

    def partial_tool_calls(self) -> List[PartialToolCall]:
        """Index-addressed accumulators in index order, unparsed."""
        keys = sorted(k for k in self.accumulators if isinstance(k, int))
        return [
            PartialToolCall(
                index=k,
                id=self.accumulators[k].id,
                name=self.accumulators[k].name,
                arguments_text=self.accumulators[k].arguments_text,
            )
            for k in keys
        ]

    # ---- chunk construction ----
    def chunk(
        self,
        delta: str = "",
        *,
        tool_calls: Optional[List[ToolCall]] = None,
        tool_call_deltas: Optional[List[ToolCallDelta]] = None,
    ) -> CompletionChunk:
        return CompletionChunk(
            id=self.chunk_id,
            delta=delta,
            tool_calls=tool_calls or None,
            tool_call_deltas=tool_call_deltas or None,
        )

    def terminal(
        self,
        delta: str = "",
        *,
        tool_calls: Optional[List[ToolCall]] = None,
        tool_call_deltas: Optional[List[ToolCallDelta]] = None,
        include_partials: bool = False,
    ) -> CompletionChunk:
        """Build the single ``finished=True`` chunk of this stream.

        Raises ``RuntimeError`` if called twice; engines check
        :attr:`terminated` before synthesizing a fallback terminal chunk.
        """
        if self.terminated:
            raise RuntimeError("terminal chunk already produced for this stream")
        self.terminated = True
        partials = self.partial_tool_calls() if include_partials else []
        return CompletionChunk(
            id=self.chunk_id,
            delta=delta,
            finished=True,
            tool_calls=tool_calls or None,
            tool_call_deltas=tool_call_deltas or None,
            partial_tool_calls=partials or None,
            usage=self.usage,
            finish_reason=self.finish_reason or "stop",
        )


__all__ = ["StreamState", "ToolCallAccumulator", "AccumulatorKey"]

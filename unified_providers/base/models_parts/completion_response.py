"""
CompletionResponse DTO returned by every adapter's non-streaming call.

The finish reason is always one of :data:`FINISH_REASONS`; vendor reasons map
through per-vendor tables and anything unrecognized becomes ``"stop"``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional

from .token_usage import TokenUsage
from .tool_call import ToolCall


FinishReason = Literal["stop", "length", "tool_calls", "content_filter", "rate_limit", "cancelled"]

FINISH_REASONS = ("stop", "length", "tool_calls", "content_filter", "rate_limit", "cancelled")


def map_finish_reason(table: Mapping[str, FinishReason], vendor_reason: Any) -> FinishReason:
    """Look ``vendor_reason`` up in ``table``; unknown or missing maps to ``"stop"``."""
    if vendor_reason is None:
        return "stop"
    key = getattr(vendor_reason, "name", vendor_reason)
    return table.get(str(key), "stop")


@dataclass
class CompletionResponse:
    """Normalized completion result.

    Attributes:
        id: Vendor response id (synthesized when the vendor provides none).
        content: Concatenated assistant text.
        model: Model that produced the response.
        usage: Token accounting.
        finish_reason: Normalized finish reason.
        tool_calls: Completed tool calls, if any.
        reasoning: Optional reasoning/thinking trace.
        metadata: Vendor extras (citations, fingerprints, ...).
    """

    id: str
    content: str
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    finish_reason: FinishReason = "stop"
    tool_calls: Optional[List[ToolCall]] = None
    reasoning: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


__all__ = [
    "CompletionResponse",
    "FinishReason",
    "FINISH_REASONS",
    "map_finish_reason",
]

"""Anthropic Messages API response to unified response."""

from __future__ import annotations

from typing import Any, List, Mapping

from ..base.models import CompletionResponse, FinishReason, ModelInfo, TokenUsage, ToolCall, map_finish_reason
from ..base.utils import coerce_arguments, get_field, get_list, new_id

ANTHROPIC_FINISH_REASONS: Mapping[str, FinishReason] = {
    "end_turn": "stop",
    "max_tokens": "length",
    "tool_use": "tool_calls",
    "stop_sequence": "stop",
    "refusal": "content_filter",
}


def parse_anthropic_usage(usage: Any) -> TokenUsage:
    return TokenUsage.of(
        get_field(usage, "input_tokens", 0),
        get_field(usage, "output_tokens", 0),
        cached=get_field(usage, "cache_read_input_tokens"),
    )


def from_anthropic_response(raw: Any, default_model: str = "") -> CompletionResponse:
    text: List[str] = []
    thinking: List[str] = []
    calls: List[ToolCall] = []
    for block in get_list(raw, "content"):
        kind = get_field(block, "type")
        if kind == "text":
            text.append(get_field(block, "text", ""))
        elif kind == "thinking":
            thinking.append(get_field(block, "thinking", ""))
        elif kind == "tool_use":
            calls.append(
                ToolCall(
                    id=get_field(block, "id") or new_id("toolu"),
                    name=get_field(block, "name", ""),
                    arguments=coerce_arguments(get_field(block, "input")),
                )
            )
    stop_sequence = get_field(raw, "stop_sequence")
    return CompletionResponse(
        id=get_field(raw, "id") or new_id("msg"),
        content="".join(text),
        model=get_field(raw, "model") or default_model,
        usage=parse_anthropic_usage(get_field(raw, "usage")),
        finish_reason=map_finish_reason(ANTHROPIC_FINISH_REASONS, get_field(raw, "stop_reason")),
        tool_calls=calls or None,
        reasoning="".join(thinking) or None,
        metadata={"stop_sequence": stop_sequence} if stop_sequence else {},
    )


def anthropic_model_info(raw: Any) -> ModelInfo:
    model_id = str(get_field(raw, "id", ""))
    return ModelInfo(
        id=model_id,
        name=get_field(raw, "display_name") or model_id,
        provider="anthropic",
        capabilities={"streaming": True, "tools": True, "vision": True, "documents": True},
    )


__all__ = ["ANTHROPIC_FINISH_REASONS", "parse_anthropic_usage", "from_anthropic_response", "anthropic_model_info"]

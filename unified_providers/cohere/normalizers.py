"""Cohere v1 response normalization."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..base.models import CompletionResponse, EmbeddingResponse, FinishReason, ModelInfo, TokenUsage, ToolCall, map_finish_reason
from ..base.utils import coerce_arguments, get_field, get_list, get_path, new_id

COHERE_FINISH_REASONS: Mapping[str, FinishReason] = {
    "COMPLETE": "stop",
    "STOP_SEQUENCE": "stop",
    "MAX_TOKENS": "length",
    "ERROR_TOXIC": "content_filter",
    "ERROR_LIMIT": "content_filter",
    "USER_CANCEL": "cancelled",
}


def parse_cohere_usage(response: Any) -> Optional[TokenUsage]:
    """Read billed units, falling back to raw token counts."""
    meta = get_field(response, "meta")
    if meta is None:
        return None
    units = get_field(meta, "billed_units") or get_field(meta, "tokens")
    if units is None:
        return None
    return TokenUsage.of(get_field(units, "input_tokens", 0), get_field(units, "output_tokens", 0))


def from_cohere_response(raw: Any, default_model: str = "") -> CompletionResponse:
    calls = [
        ToolCall(
            id=get_field(c, "id") or new_id("call"),
            name=get_field(c, "name", ""),
            arguments=coerce_arguments(get_field(c, "parameters")),
        )
        for c in get_list(raw, "tool_calls")
    ]
    finish = map_finish_reason(COHERE_FINISH_REASONS, get_field(raw, "finish_reason"))
    if calls and finish == "stop":
        finish = "tool_calls"
    return CompletionResponse(
        id=get_field(raw, "generation_id") or get_field(raw, "response_id") or new_id("cohere"),
        content=get_field(raw, "text", "") or "",
        model=default_model,
        usage=parse_cohere_usage(raw) or TokenUsage(),
        finish_reason=finish,
        tool_calls=calls or None,
        metadata={k: get_field(raw, k) for k in ("response_id", "citations") if get_field(raw, k)},
    )


def from_cohere_embedding(raw: Any, model: str) -> EmbeddingResponse:
    embeddings = get_field(raw, "embeddings")
    if isinstance(embeddings, Mapping):
        embeddings = embeddings.get("float", [])
    return EmbeddingResponse(
        embeddings=[list(v) for v in embeddings or []],
        model=model,
        usage=TokenUsage.of(get_path(raw, "meta", "billed_units", "input_tokens", default=0), 0),
    )


def cohere_model_info(raw: Any) -> ModelInfo:
    name = str(get_field(raw, "name", ""))
    endpoints = list(get_field(raw, "endpoints", []) or [])
    features = list(get_field(raw, "features", []) or [])
    return ModelInfo(
        id=name,
        name=name,
        provider="cohere",
        context_length=get_field(raw, "context_length"),
        capabilities={
            "streaming": "chat" in endpoints,
            "tools": "tools" in features or "tool_use" in features,
            "embeddings": "embed" in endpoints,
            "vision": "vision" in features,
        },
    )


__all__ = ["COHERE_FINISH_REASONS", "parse_cohere_usage", "from_cohere_response", "from_cohere_embedding", "cohere_model_info"]

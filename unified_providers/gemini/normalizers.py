"""Gemini response normalization.

Works on ``GenerateContentResponse`` objects and plain dicts alike. Gemini
responses carry no id; one is synthesized when ``response_id`` is absent.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..base.models import CompletionResponse, EmbeddingResponse, FinishReason, ModelInfo, TokenUsage, map_finish_reason
from ..base.streaming.whole_value_stream import finish_reason_of, split_parts
from ..base.utils import get_field, get_list, get_path, new_id

GEMINI_FINISH_REASONS: Mapping[str, FinishReason] = {
    "STOP": "stop",
    "MAX_TOKENS": "length",
    "SAFETY": "content_filter",
    "RECITATION": "content_filter",
    "BLOCKLIST": "content_filter",
    "PROHIBITED_CONTENT": "content_filter",
    "SPII": "content_filter",
}


def parse_gemini_usage(metadata: Any) -> Optional[TokenUsage]:
    if metadata is None:
        return None
    return TokenUsage.of(
        get_field(metadata, "prompt_token_count", 0),
        get_field(metadata, "candidates_token_count", 0),
        cached=get_field(metadata, "cached_content_token_count") or None,
        reasoning=get_field(metadata, "thoughts_token_count") or None,
    )


def _thoughts(candidate: Any) -> Optional[str]:
    texts = [get_field(p, "text", "") for p in get_list(get_field(candidate, "content"), "parts") if get_field(p, "thought")]
    return "".join(texts) or None


def from_gemini_response(raw: Any, default_model: str = "") -> CompletionResponse:
    candidates = get_list(raw, "candidates")
    candidate = candidates[0] if candidates else None
    text, calls = split_parts(candidate) if candidate is not None else ("", [])
    if candidate is None and get_path(raw, "prompt_feedback", "block_reason"):
        finish: FinishReason = "content_filter"
    else:
        finish = map_finish_reason(GEMINI_FINISH_REASONS, finish_reason_of(candidate))
    metadata: Dict[str, Any] = {}
    version = get_field(raw, "model_version")
    if version:
        metadata["model_version"] = version
    return CompletionResponse(
        id=get_field(raw, "response_id") or new_id("gemini"),
        content=text,
        model=default_model,
        usage=parse_gemini_usage(get_field(raw, "usage_metadata")) or TokenUsage(),
        finish_reason=finish,
        tool_calls=calls or None,
        reasoning=_thoughts(candidate) if candidate is not None else None,
        metadata=metadata,
    )


def from_gemini_embedding(raw: Any, model: str, count: int) -> EmbeddingResponse:
    """Normalize ``embed_content`` output (one vector, or a list for batches)."""
    vectors = get_field(raw, "embedding", [])
    if count == 1 and vectors and not isinstance(vectors[0], (list, tuple)):
        vectors = [vectors]
    return EmbeddingResponse(embeddings=[list(v) for v in vectors], model=model)


def gemini_model_info(raw: Any) -> ModelInfo:
    name = str(get_field(raw, "name", ""))
    model_id = name[len("models/"):] if name.startswith("models/") else name
    methods: List[str] = list(get_field(raw, "supported_generation_methods", []) or [])
    return ModelInfo(
        id=model_id,
        name=get_field(raw, "display_name") or model_id,
        provider="gemini",
        description=get_field(raw, "description"),
        context_length=get_field(raw, "input_token_limit"),
        max_output_tokens=get_field(raw, "output_token_limit"),
        capabilities={
            "streaming": "generateContent" in methods,
            "tools": "generateContent" in methods,
            "embeddings": "embedContent" in methods,
            "vision": "generateContent" in methods,
        },
    )


__all__ = [
    "GEMINI_FINISH_REASONS",
    "parse_gemini_usage",
    "from_gemini_response",
    "from_gemini_embedding",
    "gemini_model_info",
]

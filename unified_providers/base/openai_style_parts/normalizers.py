"""Response-side normalization of chat-completions payloads.

Accepts both SDK objects (``openai``) and decoded JSON dicts (raw-HTTP
adapters) through :func:`~unified_providers.base.utils.get_field`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..models import CompletionResponse, EmbeddingResponse, FinishReason, ModelInfo, TokenUsage, ToolCall, map_finish_reason
from ..utils import coerce_arguments, get_field, get_list, get_path, new_id

OPENAI_FINISH_REASONS: Mapping[str, FinishReason] = {
    "stop": "stop",
    "length": "length",
    "tool_calls": "tool_calls",
    "function_call": "tool_calls",
    "content_filter": "content_filter",
}


def parse_openai_usage(usage: Any) -> Optional[TokenUsage]:
    if usage is None:
        return None
    return TokenUsage.of(
        get_field(usage, "prompt_tokens", 0),
        get_field(usage, "completion_tokens", 0),
        cached=get_path(usage, "prompt_tokens_details", "cached_tokens"),
        reasoning=get_path(usage, "completion_tokens_details", "reasoning_tokens"),
    )


def _content_text(content: Any) -> str:
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    return "".join(get_field(p, "text", "") for p in content if get_field(p, "type") == "text")


def _tool_calls(message: Any) -> List[ToolCall]:
    calls: List[ToolCall] = []
    for raw in get_list(message, "tool_calls"):
        fn = get_field(raw, "function")
        calls.append(
            ToolCall(
                id=get_field(raw, "id") or new_id("call"),
                name=get_field(fn, "name", ""),
                arguments=coerce_arguments(get_field(fn, "arguments")),
            )
        )
    return calls


def from_openai_response(
    raw: Any,
    *,
    finish_reasons: Mapping[str, FinishReason] = OPENAI_FINISH_REASONS,
    default_model: str = "",
) -> CompletionResponse:
    """Normalize a chat-completions response (first choice)."""
    choices = get_list(raw, "choices")
    choice = choices[0] if choices else None
    message = get_field(choice, "message")
    metadata: Dict[str, Any] = {}
    for key in ("system_fingerprint", "created", "provider"):
        value = get_field(raw, key)
        if value is not None:
            metadata[key] = value
    calls = _tool_calls(message)
    return CompletionResponse(
        id=get_field(raw, "id") or new_id("chatcmpl"),
        content=_content_text(get_field(message, "content")),
        model=get_field(raw, "model", default_model),
        usage=parse_openai_usage(get_field(raw, "usage")) or TokenUsage(),
        finish_reason=map_finish_reason(finish_reasons, get_field(choice, "finish_reason")),
        tool_calls=calls or None,
        reasoning=get_field(message, "reasoning_content") or get_field(message, "reasoning"),
        metadata=metadata,
    )


def from_embedding_response(raw: Any, model: str) -> EmbeddingResponse:
    """Normalize an ``/embeddings`` response (OpenAI and Mistral share the shape)."""
    usage = get_field(raw, "usage")
    return EmbeddingResponse(
        embeddings=[list(get_field(item, "embedding", [])) for item in get_list(raw, "data")],
        model=get_field(raw, "model") or model,
        usage=TokenUsage.of(get_field(usage, "prompt_tokens", 0), 0),
    )


def openai_model_info(raw: Any, provider: str) -> ModelInfo:
    """Build a ``ModelInfo`` from a ``/models`` entry."""
    model_id = str(get_field(raw, "id", ""))
    return ModelInfo(
        id=model_id,
        name=get_field(raw, "name", model_id),
        provider=provider,
        description=get_field(raw, "description"),
        context_length=get_field(raw, "context_length") or get_path(raw, "capabilities", "limits", "max_context_window_tokens"),
        max_output_tokens=get_path(raw, "top_provider", "max_completion_tokens")
        or get_path(raw, "capabilities", "limits", "max_output_tokens"),
        capabilities={"streaming": True, "tools": True},
    )


__all__ = [
    "OPENAI_FINISH_REASONS",
    "parse_openai_usage",
    "from_openai_response",
    "openai_model_info",
    "from_embedding_response",
]

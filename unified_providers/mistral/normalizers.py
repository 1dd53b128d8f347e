"""Mistral response normalization (chat-completions shape)."""

from __future__ import annotations

from typing import Any, Mapping

from ..base.models import FinishReason, ModelInfo
from ..base.openai_style_parts import OPENAI_FINISH_REASONS, from_embedding_response, from_openai_response, parse_openai_usage
from ..base.utils import get_field

MISTRAL_FINISH_REASONS: Mapping[str, FinishReason] = {
    **OPENAI_FINISH_REASONS,
    "model_length": "length",
    "error": "stop",
}


def mistral_model_info(raw: Any) -> ModelInfo:
    model_id = str(get_field(raw, "id", ""))
    caps = get_field(raw, "capabilities") or {}
    return ModelInfo(
        id=model_id,
        name=get_field(raw, "name") or model_id,
        provider="mistral",
        description=get_field(raw, "description"),
        context_length=get_field(raw, "max_context_length"),
        capabilities={
            "streaming": bool(get_field(caps, "completion_chat", True)),
            "tools": bool(get_field(caps, "function_calling", False)),
            "vision": bool(get_field(caps, "vision", False)),
        },
    )


__all__ = ["MISTRAL_FINISH_REASONS", "from_embedding_response", "from_openai_response", "parse_openai_usage", "mistral_model_info"]

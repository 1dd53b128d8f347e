"""OpenRouter response normalization.

Chat responses use the chat-completions normalizer; model entries carry
OpenRouter's architecture and modality metadata, which is folded into
``ModelInfo.capabilities``.
"""

from __future__ import annotations

from typing import Any

from ..base.models import ModelInfo
from ..base.openai_style_parts import OPENAI_FINISH_REASONS, openai_model_info
from ..base.utils import get_field

OPENROUTER_FINISH_REASONS = OPENAI_FINISH_REASONS


def openrouter_model_info(raw: Any) -> ModelInfo:
    info = openai_model_info(raw, "openrouter")
    architecture = get_field(raw, "architecture") or {}
    input_modalities = get_field(architecture, "input_modalities") or []
    modality = str(get_field(architecture, "modality") or "")
    info.capabilities = {
        "streaming": True,
        "tools": "tools" in (get_field(raw, "supported_parameters") or []),
        "vision": "image" in input_modalities or "image" in modality.split("->")[0],
        "audio": "audio" in input_modalities,
        "embeddings": False,
        "reasoning": "reasoning" in (get_field(raw, "supported_parameters") or []),
    }
    return info


__all__ = ["OPENROUTER_FINISH_REASONS", "openrouter_model_info"]

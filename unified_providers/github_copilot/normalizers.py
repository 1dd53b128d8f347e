"""GitHub Copilot response normalization (chat-completions format)."""

from __future__ import annotations

from ..base.openai_style_parts import OPENAI_FINISH_REASONS, from_openai_response, openai_model_info

COPILOT_FINISH_REASONS = OPENAI_FINISH_REASONS

__all__ = ["COPILOT_FINISH_REASONS", "from_openai_response", "openai_model_info"]

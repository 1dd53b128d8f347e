"""GitHub Copilot request conversion (chat-completions wire format)."""

from __future__ import annotations

from ..base.openai_style_parts import OPENAI_TOOL_CHOICES, build_chat_payload

COPILOT_TOOL_CHOICES = OPENAI_TOOL_CHOICES

__all__ = ["COPILOT_TOOL_CHOICES", "build_chat_payload"]

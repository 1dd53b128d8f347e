"""OpenRouter request conversion.

OpenRouter accepts the chat-completions wire format unchanged; content
support is text and images only, so video, audio and document parts are
rejected rather than smuggled through as image URLs.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base.models import CompletionRequest
from ..base.openai_style_parts import OPENAI_TOOL_CHOICES, build_chat_payload

OPENROUTER_TOOL_CHOICES = OPENAI_TOOL_CHOICES


def to_openrouter_payload(request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
    return build_chat_payload(request, "openrouter", stream=stream, tool_choices=OPENROUTER_TOOL_CHOICES)


def attribution_headers(site_url: Optional[str], app_name: Optional[str]) -> Dict[str, str]:
    """Return the ``HTTP-Referer``/``X-Title`` ranking headers that are set."""
    headers: Dict[str, str] = {}
    if site_url:
        headers["HTTP-Referer"] = site_url
    if app_name:
        headers["X-Title"] = app_name
    return headers


__all__ = ["OPENROUTER_TOOL_CHOICES", "to_openrouter_payload", "attribution_headers"]

"""Unified request to Mistral chat-completions body.

Mistral follows the chat-completions shape with two differences: tool
results must carry the function ``name`` next to ``tool_call_id`` and a
forced tool call is spelled ``"any"``.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.models import CompletionRequest, EmbeddingRequest
from ..base.openai_style_parts import OPENAI_TOOL_CHOICES, ToolChoiceTable, build_chat_payload

MISTRAL_TOOL_CHOICES: ToolChoiceTable = {**OPENAI_TOOL_CHOICES, "required": "any"}


def to_mistral_payload(request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
    """Build the chat body; usage arrives on the final stream event unasked."""
    return build_chat_payload(
        request,
        "mistral",
        stream=stream,
        tool_choices=MISTRAL_TOOL_CHOICES,
        tool_names=True,
        include_usage=False,
    )


def to_mistral_embed_payload(request: EmbeddingRequest, model: str) -> Dict[str, Any]:
    return {"model": model, "input": request.inputs()}


__all__ = ["MISTRAL_TOOL_CHOICES", "to_mistral_payload", "to_mistral_embed_payload"]

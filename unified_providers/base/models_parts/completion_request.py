"""
CompletionRequest DTO for provider-agnostic chat invocations.

Converters map this normalized request shape onto each vendor's wire format.
The request contains model selection, messages, sampling parameters and the
optional tool, response-format and stop-sequence controls.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from .message import Message
from .tool_definition import ToolChoice, ToolDefinition


@dataclass
class ResponseFormat:
    """Requested output format.

    Attributes:
        type: ``"text"``, ``"json_object"`` or ``"json_schema"``.
        json_schema: Schema payload for ``"json_schema"``. OpenAI-style
            vendors expect ``{"name": ..., "schema": {...}}``; converters for
            vendors that want the bare schema unwrap ``schema`` when present.
    """

    type: Literal["text", "json_object", "json_schema"] = "text"
    json_schema: Optional[Dict[str, Any]] = None

    def bare_schema(self) -> Optional[Dict[str, Any]]:
        """Return the JSON schema without an OpenAI-style envelope."""
        if not self.json_schema:
            return None
        inner = self.json_schema.get("schema")
        return inner if isinstance(inner, dict) else self.json_schema


@dataclass
class CompletionRequest:
    """Normalized completion request sent to provider adapters.

    Attributes:
        model: Target model identifier.
        messages: Ordered list of chat `Message` instances.
        temperature: Sampling temperature when supported by the provider.
        max_tokens: Maximum tokens for the completion.
        top_p: Nucleus sampling parameter.
        tools: Tool definitions offered to the model.
        tool_choice: Tool selection mode; ignored when no tools are offered.
        response_format: Optional structured output request.
        stop: One stop sequence or a list of them.
        stream: Whether the caller intends to stream. Adapters choose the
            transport from the method called, not from this flag.
    """

    model: str
    messages: List[Message]
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    tools: List[ToolDefinition] = field(default_factory=list)
    tool_choice: Optional[ToolChoice] = None
    response_format: Optional[ResponseFormat] = None
    stop: Union[str, List[str], None] = None
    stream: bool = False

    def stop_sequences(self) -> Optional[List[str]]:
        """Return ``stop`` normalized to a list (``None`` when unset)."""
        if self.stop is None:
            return None
        if isinstance(self.stop, str):
            return [self.stop]
        return list(self.stop)


__all__ = [
    "CompletionRequest",
    "ResponseFormat",
]

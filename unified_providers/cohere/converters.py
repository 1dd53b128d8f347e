"""Unified request to Cohere v1 ``/chat`` body.

The v1 protocol splits the conversation into ``preamble`` (system text),
``chat_history`` and the current ``message``, which must come from a final
user turn. Content is text only. Tool results in history name the call they
answer, resolved from the earlier assistant message.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.errors import ErrorCode, ProviderError
from ..base.models import CompletionRequest, EmbeddingRequest, Message, ToolCall, ToolDefinition, tool_choice_mode
from ..base.utils.messages import require_last_user, require_text_only, resolve_tool_call, split_system_messages

PROVIDER = "cohere"

JSON_SCHEMA_TO_COHERE_TYPES: Mapping[str, str] = {
    "string": "str",
    "number": "float",
    "integer": "int",
    "boolean": "bool",
    "array": "list",
    "object": "dict",
}

_ROLES = {"user": "USER", "assistant": "CHATBOT"}


def _call_to_wire(call: ToolCall) -> Dict[str, Any]:
    return {"name": call.name, "parameters": call.arguments}


def to_cohere_history(messages: Sequence[Message]) -> List[Dict[str, Any]]:
    """Convert every message before the final user turn."""
    history: List[Dict[str, Any]] = []
    for position, message in enumerate(messages):
        if message.role == "tool":
            call = resolve_tool_call(messages, position, PROVIDER)
            history.append(
                {
                    "role": "TOOL",
                    "tool_results": [{"call": _call_to_wire(call), "outputs": [{"result": require_text_only(message, PROVIDER)}]}],
                }
            )
            continue
        entry: Dict[str, Any] = {"role": _ROLES[message.role], "message": require_text_only(message, PROVIDER)}
        if message.role == "assistant" and message.tool_calls:
            entry["tool_calls"] = [_call_to_wire(c) for c in message.tool_calls]
        history.append(entry)
    return history


def to_parameter_definitions(schema: Mapping[str, Any]) -> Dict[str, Any]:
    required = set(schema.get("required") or [])
    definitions: Dict[str, Any] = {}
    for name, prop in (schema.get("properties") or {}).items():
        definitions[name] = {
            "description": prop.get("description", ""),
            "type": JSON_SCHEMA_TO_COHERE_TYPES.get(prop.get("type"), "str"),
            "required": name in required,
        }
    return definitions


def to_cohere_tools(tools: Sequence[ToolDefinition]) -> List[Dict[str, Any]]:
    return [
        {"name": t.name, "description": t.description, "parameter_definitions": to_parameter_definitions(t.parameters)}
        for t in tools
    ]


def to_cohere_payload(request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
    """Build the v1 chat body.

    Raises:
        ProviderError: ``validation_error`` when the last message is not from
            the user or a tool result cannot be matched; ``unsupported_content``
            for non-text parts; ``unsupported`` for forced tool choices.
    """
    preamble, rest = split_system_messages(request.messages, PROVIDER, "\n")
    last = require_last_user(rest, PROVIDER)
    payload: Dict[str, Any] = {
        "model": request.model,
        "message": require_text_only(last, PROVIDER),
        "chat_history": to_cohere_history(rest[:-1]),
    }
    if preamble:
        payload["preamble"] = preamble
    if request.temperature is not None:
        payload["temperature"] = request.temperature
    if request.max_tokens is not None:
        payload["max_tokens"] = request.max_tokens
    if request.top_p is not None:
        payload["p"] = request.top_p
    stop = request.stop_sequences()
    if stop:
        payload["stop_sequences"] = stop
    if request.tools:
        mode = tool_choice_mode(request.tool_choice, PROVIDER)
        if mode in ("required", "named"):
            raise ProviderError(
                code=ErrorCode.UNSUPPORTED,
                message=f"cohere does not support tool_choice '{mode}'",
                provider=PROVIDER,
            )
        if mode == "auto":
            payload["tools"] = to_cohere_tools(request.tools)
    fmt = request.response_format
    if fmt is not None and fmt.type != "text":
        response_format: Dict[str, Any] = {"type": "json_object"}
        schema = fmt.bare_schema()
        if schema:
            response_format["schema"] = schema
        payload["response_format"] = response_format
    if stream:
        payload["stream"] = True
    return payload


def to_cohere_embed_payload(request: EmbeddingRequest, model: str) -> Dict[str, Any]:
    return {
        "model": model,
        "texts": request.inputs(),
        "input_type": request.input_type or "search_document",
        "embedding_types": ["float"],
    }


__all__ = [
    "JSON_SCHEMA_TO_COHERE_TYPES",
    "to_cohere_history",
    "to_parameter_definitions",
    "to_cohere_tools",
    "to_cohere_payload",
    "to_cohere_embed_payload",
]

"""Unified request to Gemini ``generate_content`` arguments.

Every media part is sent as ``inline_data`` with decoded bytes; remote
references have no inline form and are rejected. Tool results become
``function`` turns whose ``function_response.name`` is resolved from the
assistant call they answer.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from ..base.errors import unsupported_content
from ..base.models import CompletionRequest, ContentPart, Message, NamedToolChoice, ToolChoice, ToolDefinition, tool_choice_mode
from ..base.utils.media import process_part
from ..base.utils.messages import require_text_only, resolve_tool_call, split_system_messages

PROVIDER = "gemini"

GEMINI_TOOL_CHOICES: Mapping[str, Union[Dict[str, Any], Callable[[NamedToolChoice], Dict[str, Any]]]] = {
    "auto": {"mode": "AUTO"},
    "none": {"mode": "NONE"},
    "required": {"mode": "ANY"},
    "named": lambda choice: {"mode": "ANY", "allowed_function_names": [choice.name]},
}


def _inline_part(part: ContentPart) -> Dict[str, Any]:
    try:
        media = process_part(part)
        if not media.is_base64:
            raise ValueError("remote references cannot be sent inline")
        data = media.decoded()
    except ValueError as exc:
        raise unsupported_content(PROVIDER, part.type, str(exc)) from exc
    return {"inline_data": {"mime_type": media.mime_type, "data": data}}


def to_gemini_parts(message: Message) -> List[Dict[str, Any]]:
    if isinstance(message.content, str):
        parts: List[Dict[str, Any]] = [{"text": message.content}] if message.content else []
    else:
        parts = []
        for part in message.content:
            if part.type == "text":
                parts.append({"text": part.text or ""})
            elif part.type in ("image", "video", "audio", "document"):
                parts.append(_inline_part(part))
            else:
                raise unsupported_content(PROVIDER, part.type)
    for call in message.tool_calls:
        parts.append({"function_call": {"name": call.name, "args": call.arguments}})
    return parts


def to_gemini_contents(messages: Sequence[Message]) -> List[Dict[str, Any]]:
    """Convert non-system messages; ``assistant`` becomes ``model``."""
    contents: List[Dict[str, Any]] = []
    for position, message in enumerate(messages):
        if message.role == "tool":
            call = resolve_tool_call(messages, position, PROVIDER)
            result = require_text_only(message, PROVIDER)
            contents.append(
                {
                    "role": "function",
                    "parts": [{"function_response": {"name": call.name, "response": {"result": result}}}],
                }
            )
            continue
        role = "model" if message.role == "assistant" else "user"
        contents.append({"role": role, "parts": to_gemini_parts(message)})
    return contents


def to_gemini_tools(tools: Sequence[ToolDefinition]) -> List[Dict[str, Any]]:
    return [
        {
            "function_declarations": [
                {"name": t.name, "description": t.description, "parameters": t.parameters} for t in tools
            ]
        }
    ]


def to_gemini_tool_config(choice: Optional[ToolChoice]) -> Dict[str, Any]:
    value = GEMINI_TOOL_CHOICES[tool_choice_mode(choice, PROVIDER)]
    config = value(choice) if callable(value) else dict(value)  # type: ignore[arg-type]
    return {"function_calling_config": config}


def to_gemini_generation_config(request: CompletionRequest) -> Dict[str, Any]:
    config: Dict[str, Any] = {}
    if request.temperature is not None:
        config["temperature"] = request.temperature
    if request.max_tokens is not None:
        config["max_output_tokens"] = request.max_tokens
    if request.top_p is not None:
        config["top_p"] = request.top_p
    stop = request.stop_sequences()
    if stop:
        config["stop_sequences"] = stop
    fmt = request.response_format
    if fmt is not None and fmt.type != "text":
        config["response_mime_type"] = "application/json"
        schema = fmt.bare_schema() if fmt.type == "json_schema" else None
        if schema:
            config["response_schema"] = schema
    return config


def to_gemini_payload(request: CompletionRequest) -> Dict[str, Any]:
    """Build the model settings plus ``contents`` for one call.

    The keys mirror ``GenerativeModel`` constructor arguments, with
    ``contents`` passed to ``generate_content_async``.
    """
    system, rest = split_system_messages(request.messages, PROVIDER, "\n")
    payload: Dict[str, Any] = {
        "model": request.model,
        "contents": to_gemini_contents(rest),
        "generation_config": to_gemini_generation_config(request),
    }
    if system:
        payload["system_instruction"] = system
    if request.tools:
        payload["tools"] = to_gemini_tools(request.tools)
        payload["tool_config"] = to_gemini_tool_config(request.tool_choice)
    return payload


__all__ = [
    "GEMINI_TOOL_CHOICES",
    "to_gemini_parts",
    "to_gemini_contents",
    "to_gemini_tools",
    "to_gemini_tool_config",
    "to_gemini_generation_config",
    "to_gemini_payload",
]

"""Request-side conversion to the chat-completions wire format.

Content support is text plus ``image_url``; video, audio and document parts
raise ``unsupported_content``. Base64 images are sent as data URLs and remote
images by reference.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from ..errors import unsupported_content
from ..models import CompletionRequest, Message, NamedToolChoice, ToolCall, ToolChoice, ToolDefinition, ResponseFormat, tool_choice_mode
from ..utils import dump_arguments
from ..utils.media import process_part
from ..utils.messages import require_text_only, resolve_tool_call

ToolChoiceTable = Mapping[str, Union[str, Callable[[NamedToolChoice], Dict[str, Any]], None]]


def _named_function(choice: NamedToolChoice) -> Dict[str, Any]:
    return {"type": "function", "function": {"name": choice.name}}


OPENAI_TOOL_CHOICES: ToolChoiceTable = {
    "auto": "auto",
    "none": "none",
    "required": "required",
    "named": _named_function,
}


def to_openai_content(message: Message, provider: str) -> Union[str, List[Dict[str, Any]]]:
    """Return string content unchanged, or the list of wire content parts."""
    if isinstance(message.content, str):
        return message.content
    parts: List[Dict[str, Any]] = []
    for part in message.content:
        if part.type == "text":
            parts.append({"type": "text", "text": part.text or ""})
        elif part.type == "image":
            try:
                media = process_part(part)
            except ValueError as exc:
                raise unsupported_content(provider, part.type, str(exc)) from exc
            parts.append({"type": "image_url", "image_url": {"url": media.as_data_url()}})
        else:
            raise unsupported_content(provider, part.type)
    return parts


def _tool_call_to_wire(call: ToolCall) -> Dict[str, Any]:
    return {
        "id": call.id,
        "type": "function",
        "function": {"name": call.name, "arguments": dump_arguments(call.arguments)},
    }


def to_openai_messages(messages: Sequence[Message], provider: str, *, tool_names: bool = False) -> List[Dict[str, Any]]:
    """Map unified messages one-to-one, preserving order and roles.

    With ``tool_names=True`` tool-result messages also carry the function
    ``name``, resolved from the assistant call they answer.
    System and tool messages are text-only on this wire format.
    """
    out: List[Dict[str, Any]] = []
    for position, message in enumerate(messages):
        if message.role == "tool":
            entry: Dict[str, Any] = {
                "role": "tool",
                "content": require_text_only(message, provider),
                "tool_call_id": message.tool_call_id,
            }
            if tool_names:
                entry["name"] = resolve_tool_call(messages, position, provider).name
            out.append(entry)
            continue
        if message.role == "system":
            content: Any = require_text_only(message, provider)
        else:
            content = to_openai_content(message, provider)
        entry = {"role": message.role, "content": content}
        if message.role == "assistant" and message.tool_calls:
            entry["content"] = content or None
            entry["tool_calls"] = [_tool_call_to_wire(c) for c in message.tool_calls]
        if message.name:
            entry["name"] = message.name
        out.append(entry)
    return out


def to_openai_tools(tools: Sequence[ToolDefinition]) -> List[Dict[str, Any]]:
    return [
        {
            "type": "function",
            "function": {"name": t.name, "description": t.description, "parameters": t.parameters},
        }
        for t in tools
    ]


def to_openai_tool_choice(
    choice: Optional[ToolChoice], table: ToolChoiceTable = OPENAI_TOOL_CHOICES, provider: Optional[str] = None
) -> Any:
    """Look ``choice`` up in ``table``; the ``named`` entry builds the object form."""
    mode = tool_choice_mode(choice, provider)
    value = table[mode]
    if callable(value):
        return value(choice)  # type: ignore[arg-type]
    return value


def to_openai_response_format(fmt: Optional[ResponseFormat]) -> Optional[Dict[str, Any]]:
    if fmt is None or fmt.type == "text":
        return None
    if fmt.type == "json_object":
        return {"type": "json_object"}
    schema = dict(fmt.json_schema or {})
    if "schema" not in schema:
        schema = {"name": "response", "schema": schema}
    return {"type": "json_schema", "json_schema": schema}


def build_chat_payload(
    request: CompletionRequest,
    provider: str,
    *,
    stream: bool,
    tool_choices: ToolChoiceTable = OPENAI_TOOL_CHOICES,
    tool_names: bool = False,
    include_usage: bool = True,
) -> Dict[str, Any]:
    """Assemble the chat-completions request body.

    Parameters:
        request: Unified request (``model`` already resolved).
        provider: Provider key used in validation errors.
        stream: Whether to request server-sent events.
        tool_choices: The vendor's tool-choice table.
        tool_names: Whether tool-result messages must carry the function name.
        include_usage: Ask for a trailing usage event when streaming.

    Raises:
        ProviderError: ``unsupported_content`` or ``validation_error`` before
            any network call.
    """
    payload: Dict[str, Any] = {
        "model": request.model,
        "messages": to_openai_messages(request.messages, provider, tool_names=tool_names),
    }
    if request.temperature is not None:
        payload["temperature"] = request.temperature
    if request.max_tokens is not None:
        payload["max_tokens"] = request.max_tokens
    if request.top_p is not None:
        payload["top_p"] = request.top_p
    stop = request.stop_sequences()
    if stop:
        payload["stop"] = stop
    if request.tools:
        payload["tools"] = to_openai_tools(request.tools)
        payload["tool_choice"] = to_openai_tool_choice(request.tool_choice, tool_choices, provider)
    response_format = to_openai_response_format(request.response_format)
    if response_format is not None:
        payload["response_format"] = response_format
    if stream:
        payload["stream"] = True
        if include_usage:
            payload["stream_options"] = {"include_usage": True}
    return payload


__all__ = [
    "OPENAI_TOOL_CHOICES",
    "ToolChoiceTable",
    "to_openai_content",
    "to_openai_messages",
    "to_openai_tools",
    "to_openai_tool_choice",
    "to_openai_response_format",
    "build_chat_payload",
]

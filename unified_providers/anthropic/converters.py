"""Unified request to Anthropic Messages API payload.

- System messages are lifted into the top-level ``system`` string.
- Tool results travel as user ``tool_result`` blocks holding text and
  images; assistant tool calls as ``tool_use`` blocks with the parsed
  arguments as ``input``.
- Images accept base64 or URL sources; documents must be base64 PDF. Video
  and audio have no representation and are rejected.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from ..base.errors import unsupported_content
from ..base.models import CompletionRequest, ContentPart, Message, NamedToolChoice, ToolChoice, ToolDefinition, tool_choice_mode
from ..base.utils.media import process_part
from ..base.utils.messages import split_system_messages
from ..config.defaults import ANTHROPIC_DEFAULT_MAX_TOKENS

PROVIDER = "anthropic"

ANTHROPIC_TOOL_CHOICES: Mapping[str, Union[None, Dict[str, Any], Callable[[NamedToolChoice], Dict[str, Any]]]] = {
    "auto": None,
    "none": {"type": "none"},
    "required": {"type": "any"},
    "named": lambda choice: {"type": "tool", "name": choice.name},
}


def _media_block(part: ContentPart) -> Dict[str, Any]:
    try:
        media = process_part(part)
    except ValueError as exc:
        raise unsupported_content(PROVIDER, part.type, str(exc)) from exc
    if part.type == "image":
        if media.is_base64:
            source = {"type": "base64", "media_type": media.mime_type, "data": media.data}
        else:
            source = {"type": "url", "url": media.data}
        return {"type": "image", "source": source}
    if not media.is_base64 or media.mime_type != "application/pdf":
        raise unsupported_content(PROVIDER, part.type, "only base64 PDF documents are accepted")
    return {"type": "document", "source": {"type": "base64", "media_type": "application/pdf", "data": media.data}}


def to_anthropic_content(message: Message) -> Union[str, List[Dict[str, Any]]]:
    if isinstance(message.content, str):
        return message.content
    blocks: List[Dict[str, Any]] = []
    for part in message.content:
        if part.type == "text":
            blocks.append({"type": "text", "text": part.text or ""})
        elif part.type in ("image", "document"):
            blocks.append(_media_block(part))
        else:
            raise unsupported_content(PROVIDER, part.type)
    return blocks


def to_tool_result_content(message: Message) -> Union[str, List[Dict[str, Any]]]:
    """``tool_result`` content: a string, or text and image blocks."""
    if isinstance(message.content, str):
        return message.content
    blocks: List[Dict[str, Any]] = []
    for part in message.content:
        if part.type == "text":
            blocks.append({"type": "text", "text": part.text or ""})
        elif part.type == "image":
            blocks.append(_media_block(part))
        else:
            raise unsupported_content(PROVIDER, part.type, "tool results accept text and images only")
    return blocks


def to_anthropic_messages(messages: Sequence[Message]) -> List[Dict[str, Any]]:
    """Convert non-system messages, preserving order."""
    out: List[Dict[str, Any]] = []
    for message in messages:
        if message.role == "tool":
            out.append(
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "tool_result",
                            "tool_use_id": message.tool_call_id,
                            "content": to_tool_result_content(message),
                        }
                    ],
                }
            )
            continue
        content = to_anthropic_content(message)
        if message.role == "assistant" and message.tool_calls:
            if isinstance(content, str):
                blocks = [{"type": "text", "text": content}] if content else []
            else:
                blocks = list(content)
            blocks += [{"type": "tool_use", "id": c.id, "name": c.name, "input": c.arguments} for c in message.tool_calls]
            content = blocks
        out.append({"role": message.role, "content": content})
    return out


def to_anthropic_tools(tools: Sequence[ToolDefinition]) -> List[Dict[str, Any]]:
    return [{"name": t.name, "description": t.description, "input_schema": t.parameters} for t in tools]


def to_anthropic_tool_choice(choice: Optional[ToolChoice]) -> Optional[Dict[str, Any]]:
    value = ANTHROPIC_TOOL_CHOICES[tool_choice_mode(choice, PROVIDER)]
    if callable(value):
        return value(choice)  # type: ignore[arg-type]
    return value


def to_anthropic_payload(request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
    """Build ``messages.create`` keyword arguments.

    Raises:
        ProviderError: ``unsupported_content`` before any network call.
    """
    system, rest = split_system_messages(request.messages, PROVIDER, "\n")
    payload: Dict[str, Any] = {
        "model": request.model,
        "messages": to_anthropic_messages(rest),
        "max_tokens": request.max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS,
    }
    if system:
        payload["system"] = system
    if request.temperature is not None:
        payload["temperature"] = request.temperature
    if request.top_p is not None:
        payload["top_p"] = request.top_p
    stop = request.stop_sequences()
    if stop:
        payload["stop_sequences"] = stop
    if request.tools:
        payload["tools"] = to_anthropic_tools(request.tools)
        choice = to_anthropic_tool_choice(request.tool_choice)
        if choice is not None:
            payload["tool_choice"] = choice
    if stream:
        payload["stream"] = True
    return payload


__all__ = [
    "ANTHROPIC_TOOL_CHOICES",
    "to_anthropic_content",
    "to_anthropic_messages",
    "to_tool_result_content",
    "to_anthropic_tools",
    "to_anthropic_tool_choice",
    "to_anthropic_payload",
]

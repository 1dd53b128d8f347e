"""Message helpers shared across converters.

Helpers here are side-effect free and operate on provider-agnostic DTOs only.
They raise :class:`ProviderError` validation errors, which converters let
propagate so failures surface before any network call.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..errors import unsupported_content, validation_error
from ..models import Message, ToolCall


def split_system_messages(
    messages: Sequence[Message], provider: str, separator: str = "\n"
) -> Tuple[Optional[str], List[Message]]:
    """Separate system messages from the conversation.

    Returns
    - ``(system_text, rest)`` where ``system_text`` joins every system
      message's text with ``separator`` (``None`` when there is none) and
      ``rest`` preserves the order of the remaining messages.

    Failure modes
    - System prompts are text-only on every vendor; a non-text part raises
      ``unsupported_content``.
    """
    system_texts: List[str] = []
    rest: List[Message] = []
    for m in messages:
        if m.role == "system":
            system_texts.append(require_text_only(m, provider))
        else:
            rest.append(m)
    return (separator.join(system_texts) if system_texts else None), rest


def require_text_only(message: Message, provider: str) -> str:
    """Return the message text, rejecting any non-text content part."""
    if isinstance(message.content, list):
        for part in message.content:
            if not part.is_text():
                raise unsupported_content(provider, part.type)
    return message.text_or_joined()


def resolve_tool_call(messages: Sequence[Message], position: int, provider: str) -> ToolCall:
    """Find the tool call answered by the tool message at ``position``.

    Walks backward from ``position`` through earlier assistant messages and
    returns the first ``ToolCall`` whose id matches the tool message's
    ``tool_call_id``.

    Failure modes
    - Raises a validation ``ProviderError`` when the tool message has no
      ``tool_call_id`` or no earlier assistant message issued that id.
    """
    tool_message = messages[position]
    call_id = tool_message.tool_call_id
    if not call_id:
        raise validation_error(provider, "tool message is missing tool_call_id", position=position)
    for i in range(position - 1, -1, -1):
        candidate = messages[i]
        if candidate.role != "assistant":
            continue
        for call in candidate.tool_calls:
            if call.id == call_id:
                return call
    raise validation_error(
        provider,
        f"no prior assistant tool call matches tool_call_id '{call_id}'",
        position=position,
        tool_call_id=call_id,
    )


def require_last_user(messages: Sequence[Message], provider: str) -> Message:
    """Return the final message, which must be user-authored."""
    if not messages:
        raise validation_error(provider, "at least one message is required")
    last = messages[-1]
    if last.role != "user":
        raise validation_error(
            provider,
            f"the last message must be from the user, got '{last.role}'",
            role=last.role,
        )
    return last


__all__ = [
    "split_system_messages",
    "require_text_only",
    "resolve_tool_call",
    "require_last_user",
]

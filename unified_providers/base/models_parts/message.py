"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Content may be either plain text or a list of `ContentPart` objects.
Assistant messages may carry tool calls; tool-role messages reference the
originating call through ``tool_call_id``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union

from .content_part import ContentPart
from .tool_call import ToolCall


# Message roles used across providers.
Role = Literal["system", "user", "assistant", "tool"]


@dataclass
class Message:
    """A chat message in the unified vocabulary.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"``,
            ``"assistant"``, or ``"tool"``).
        content: Either a plain text string or an ordered list of
            `ContentPart` items.
        name: Optional author name (forwarded where vendors accept one).
        tool_call_id: For ``"tool"`` messages, the id of the call answered.
        tool_calls: For ``"assistant"`` messages, the calls the model issued.
    """

    role: Role
    content: Union[str, List[ContentPart]]
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: List[ToolCall] = field(default_factory=list)

    @classmethod
    def system(cls, text: str) -> "Message":
        return cls(role="system", content=text)

    @classmethod
    def user(cls, content: Union[str, List[ContentPart]]) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, text: str = "", tool_calls: Optional[List[ToolCall]] = None) -> "Message":
        return cls(role="assistant", content=text, tool_calls=list(tool_calls or []))

    @classmethod
    def tool(cls, tool_call_id: str, result: str) -> "Message":
        return cls(role="tool", content=result, tool_call_id=tool_call_id)

    def is_structured(self) -> bool:
        """Return True if the message content is a structured list of parts."""
        return isinstance(self.content, list)

    def text_or_joined(self) -> str:
        """Return the text of the message with text parts concatenated.

        Non-text parts contribute nothing; converters that must reject them
        check the parts explicitly before flattening.
        """
        if isinstance(self.content, str):
            return self.content
        return "".join(p.text or "" for p in self.content if p.is_text())


__all__ = [
    "Message",
    "Role",
]

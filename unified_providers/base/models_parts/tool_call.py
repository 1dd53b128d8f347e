"""
Tool-call models shared by responses, chunks and assistant messages.

``ToolCall`` is the only shape exposed as a *completed* call: its
``arguments`` are always a parsed JSON object. Index-addressed streams expose
fragments through ``ToolCallDelta`` and, on their terminal chunk, the
accumulated-but-unparsed ``PartialToolCall`` entries.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class ToolCall:
    """A model-issued request to invoke a named function.

    Attributes:
        id: Vendor-issued (or synthesized) call identifier.
        name: Function name.
        arguments: Fully parsed JSON object of arguments.
    """

    id: str
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ToolCallDelta:
    """One streamed fragment of a tool call addressed by integer index.

    ``id`` and ``name`` usually arrive once on the first fragment for an
    index; ``arguments`` holds only the text carried by this event.
    """

    index: int
    id: Optional[str] = None
    name: Optional[str] = None
    arguments: str = ""


@dataclass
class PartialToolCall:
    """Accumulated state of an index-addressed tool call at end of stream.

    The argument text is the ordered concatenation of every fragment seen for
    ``index``. It is deliberately left unparsed; see
    :func:`unified_providers.base.streaming.finalize_partial_tool_calls`.
    """

    index: int
    id: Optional[str]
    name: Optional[str]
    arguments_text: str


__all__ = ["ToolCall", "ToolCallDelta", "PartialToolCall"]

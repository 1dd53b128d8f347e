"""
Tool definition and tool-choice vocabulary.

``ToolChoice`` is either one of the literal modes or a ``NamedToolChoice``
pinning the model to a single function. Converters look the mode up in their
own explicit per-vendor tables via :func:`tool_choice_mode`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Union

from ..errors import validation_error


@dataclass
class ToolDefinition:
    """A function the model may call.

    Attributes:
        name: Function name exposed to the model.
        description: Human-readable description.
        parameters: JSON-Schema object describing the arguments.
    """

    name: str
    description: str = ""
    parameters: Dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})


@dataclass(frozen=True)
class NamedToolChoice:
    """Pin the model to calling the function ``name``."""

    name: str


ToolChoice = Union[Literal["auto", "none", "required"], NamedToolChoice]

ToolChoiceMode = Literal["auto", "none", "required", "named"]


def tool_choice_mode(choice: Optional[ToolChoice], provider: Optional[str] = None) -> ToolChoiceMode:
    """Return the table key for ``choice`` (``None`` means ``"auto"``).

    Raises:
        ProviderError: ``validation_error`` for a value outside the vocabulary.
    """
    if choice is None:
        return "auto"
    if isinstance(choice, NamedToolChoice):
        return "named"
    if choice in ("auto", "none", "required"):
        return choice
    raise validation_error(provider, f"unknown tool choice: {choice!r}", tool_choice=repr(choice))


__all__ = [
    "ToolDefinition",
    "NamedToolChoice",
    "ToolChoice",
    "ToolChoiceMode",
    "tool_choice_mode",
]

"""
ModelInfo DTO for provider model listings.

Represents a single model entry as returned by a vendor's model listing API.
Capabilities are kept in a generic mapping to keep adapters decoupled from
vendor specifics; caching and pricing live outside this package.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class ModelInfo:
    """A single model listing entry.

    Attributes:
        id: Stable model identifier.
        name: Human-friendly display name.
        provider: Provider key owning this model.
        description: Optional vendor description.
        context_length: Optional maximum context window size.
        max_output_tokens: Optional output token limit.
        capabilities: Map of capability flags (``streaming``, ``tools``,
            ``vision``, ``embeddings``, ...).

    Methods:
        to_dict: Return a JSON-serializable dictionary of the entry.
    """

    id: str
    name: str
    provider: str
    description: Optional[str] = None
    context_length: Optional[int] = None
    max_output_tokens: Optional[int] = None
    capabilities: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return asdict(self)


__all__ = [
    "ModelInfo",
]

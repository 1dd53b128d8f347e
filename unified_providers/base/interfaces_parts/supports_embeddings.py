"""SupportsEmbeddings Protocol (single-class module)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import EmbeddingRequest, EmbeddingResponse


@runtime_checkable
class SupportsEmbeddings(Protocol):
    """Capability marker for adapters that can produce text embeddings."""

    async def generate_embedding(self, request: EmbeddingRequest) -> EmbeddingResponse:  # pragma: no cover - interface
        ...

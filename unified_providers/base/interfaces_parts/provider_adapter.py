"""ProviderAdapter Protocol (single-class module).

Defines the chat contract every vendor adapter satisfies.
"""

from __future__ import annotations

from typing import AsyncIterator, List, Optional, Protocol, runtime_checkable

from ..models import CompletionChunk, CompletionRequest, CompletionResponse, ModelInfo


@runtime_checkable
class ProviderAdapter(Protocol):
    """Uniform interface over one vendor's chat API.

    Implementations map ``CompletionRequest`` onto the vendor wire format,
    normalize results to ``CompletionResponse``/``CompletionChunk`` and never
    let a vendor SDK object or exception escape. Failures surface as
    ``ProviderError``.
    """

    @property
    def name(self) -> str:
        """Canonical provider key, e.g. ``"openai"`` or ``"github-copilot"``."""
        ...

    async def generate_completion(self, request: CompletionRequest) -> CompletionResponse:
        """Execute one non-streaming completion."""
        ...

    def stream_completion(self, request: CompletionRequest) -> AsyncIterator[CompletionChunk]:
        """Stream a completion as unified chunks.

        Exactly one chunk has ``finished=True``; closing the iterator early
        releases the underlying connection.
        """
        ...

    async def list_models(self) -> List[ModelInfo]:
        ...

    async def get_model(self, model_id: str) -> Optional[ModelInfo]:
        """Return the listing entry for ``model_id`` or ``None`` when unknown."""
        ...

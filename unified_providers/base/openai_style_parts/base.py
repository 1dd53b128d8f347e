"""BaseOpenAIStyleAdapter for vendors reached through the ``openai`` SDK.

Purpose:
- Share the chat-completions lifecycle between the OpenAI and GitHub Copilot
  adapters; both talk to an ``AsyncOpenAI`` client and differ only in how
  the client is constructed and authenticated.

External dependencies:
- ``openai`` (``AsyncOpenAI``). The client is created lazily by
  ``_make_client`` and reused for the adapter's lifetime.

Streaming:
- ``chat.completions.create(stream=True)`` returns an ``AsyncStream``; the
  index-addressed engine reconstructs it and the stream is closed when the
  consumer stops early.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import partial
from typing import Any, AsyncIterator, Dict, List, Optional

from ..adapter_parts import BaseProviderAdapter, _AdapterInit
from ..models import CompletionRequest, CompletionResponse, ModelInfo
from ..streaming import reconstruct_index_stream
from ..streaming.driver import StreamEngine
from .converters import OPENAI_TOOL_CHOICES, build_chat_payload
from .normalizers import OPENAI_FINISH_REASONS, from_openai_response, openai_model_info, parse_openai_usage


class BaseOpenAIStyleAdapter(BaseProviderAdapter):
    """Chat-completions adapter over an ``AsyncOpenAI``-compatible client.

    Subclasses implement ``_make_client()``.
    """

    finish_reasons = OPENAI_FINISH_REASONS
    tool_choices = OPENAI_TOOL_CHOICES
    stream_usage = True

    def __init__(self, init: _AdapterInit) -> None:
        super().__init__(init)
        self._client: Optional[Any] = None

    def _make_client(self) -> Any:  # pragma: no cover - abstract
        raise NotImplementedError

    def client(self) -> Any:
        """Return the lazily created SDK client."""
        if self._client is None:
            self._client = self._make_client()
        return self._client

    # ----- Hooks -----
    def _build_payload(self, request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
        return build_chat_payload(
            request,
            self.name,
            stream=stream,
            tool_choices=self.tool_choices,
            include_usage=self.stream_usage,
        )

    async def _send(self, payload: Dict[str, Any]) -> Any:
        return await self.client().chat.completions.create(**payload)

    def _normalize(self, raw: Any, request: CompletionRequest) -> CompletionResponse:
        return from_openai_response(raw, finish_reasons=self.finish_reasons, default_model=request.model)

    @asynccontextmanager
    async def _open_stream(self, payload: Dict[str, Any]) -> AsyncIterator[Any]:
        stream = await self.client().chat.completions.create(**payload)
        try:
            yield stream
        finally:
            await stream.close()

    def _stream_engine(self) -> StreamEngine:
        return partial(
            reconstruct_index_stream,
            provider=self.name,
            finish_reasons=self.finish_reasons,
            usage_parser=parse_openai_usage,
        )

    async def _fetch_models(self) -> List[ModelInfo]:
        return [openai_model_info(m, self.name) async for m in self.client().models.list()]


__all__ = ["BaseOpenAIStyleAdapter"]

"""Mistral adapter over raw ``httpx`` (SSE streaming).

Chat-completions compatible apart from the converter differences noted in
:mod:`.converters`; the index-addressed stream engine is shared with OpenAI.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import partial
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional

import httpx

from ..base.adapter_parts import BaseProviderAdapter, HttpTransportMixin, resolve_settings
from ..base.models import CompletionRequest, CompletionResponse, EmbeddingRequest, EmbeddingResponse, ModelInfo
from ..base.streaming import iter_sse_json, reconstruct_index_stream
from ..base.streaming.driver import StreamEngine
from ..base.utils import get_list
from ..config.defaults import MISTRAL_DEFAULT_EMBEDDING_MODEL
from .converters import to_mistral_embed_payload, to_mistral_payload
from .normalizers import (
    MISTRAL_FINISH_REASONS,
    from_embedding_response,
    from_openai_response,
    mistral_model_info,
    parse_openai_usage,
)

__all__ = ["MistralAdapter"]


class MistralAdapter(HttpTransportMixin, BaseProviderAdapter):
    """Mistral chat, streaming and embeddings adapter."""

    name = "mistral"

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        init, _ = resolve_settings(
            self.name,
            model=model,
            api_key=api_key,
            base_url=base_url,
            headers=headers,
            timeout_seconds=timeout_seconds,
        )
        super().__init__(init)
        self._http_client = http_client

    # ----- Hooks -----
    def _build_payload(self, request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
        return to_mistral_payload(request, stream=stream)

    async def _send(self, payload: Dict[str, Any]) -> Any:
        return await self._post_json("/chat/completions", payload)

    def _normalize(self, raw: Any, request: CompletionRequest) -> CompletionResponse:
        return from_openai_response(raw, finish_reasons=MISTRAL_FINISH_REASONS, default_model=request.model)

    @asynccontextmanager
    async def _open_stream(self, payload: Dict[str, Any]) -> AsyncIterator[Any]:
        async with self._stream_lines("/chat/completions", payload) as lines:
            yield iter_sse_json(lines)

    def _stream_engine(self) -> StreamEngine:
        return partial(
            reconstruct_index_stream,
            provider=self.name,
            finish_reasons=MISTRAL_FINISH_REASONS,
            usage_parser=parse_openai_usage,
        )

    async def _fetch_models(self) -> List[ModelInfo]:
        data = await self._get_json("/models")
        return [mistral_model_info(m) for m in get_list(data, "data")]

    # ----- Capabilities -----
    async def generate_embedding(self, request: EmbeddingRequest) -> EmbeddingResponse:
        model = request.model or MISTRAL_DEFAULT_EMBEDDING_MODEL
        payload = to_mistral_embed_payload(request, model)
        raw = await self._guarded(
            "embedding generation",
            self._ctx(model, "embeddings"),
            lambda: self._post_json("/embeddings", payload),
        )
        return from_embedding_response(raw, model)

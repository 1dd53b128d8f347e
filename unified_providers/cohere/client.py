"""Cohere adapter over raw ``httpx`` (v1 chat API).

Chat and embeddings are JSON POSTs; streaming responses are newline-delimited
JSON events reconstructed by the event-typed engine. The API key is sent as a
bearer token.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import partial
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional

import httpx

from ..base.adapter_parts import BaseProviderAdapter, HttpTransportMixin, resolve_settings
from ..base.logging import normalized_log_event
from ..base.models import CompletionRequest, CompletionResponse, EmbeddingRequest, EmbeddingResponse, ModelInfo
from ..base.streaming import iter_ndjson, reconstruct_event_stream
from ..base.streaming.driver import StreamEngine
from ..base.utils import get_list
from ..config.defaults import COHERE_DEFAULT_EMBEDDING_MODEL
from .converters import to_cohere_embed_payload, to_cohere_payload
from .normalizers import COHERE_FINISH_REASONS, cohere_model_info, from_cohere_embedding, from_cohere_response, parse_cohere_usage

__all__ = ["CohereAdapter"]


class CohereAdapter(HttpTransportMixin, BaseProviderAdapter):
    """Cohere Command adapter (chat, streaming, embeddings, model listing)."""

    name = "cohere"

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
        return to_cohere_payload(request, stream=stream)

    async def _send(self, payload: Dict[str, Any]) -> Any:
        return await self._post_json("/v1/chat", payload)

    def _normalize(self, raw: Any, request: CompletionRequest) -> CompletionResponse:
        return from_cohere_response(raw, default_model=request.model)

    @asynccontextmanager
    async def _open_stream(self, payload: Dict[str, Any]) -> AsyncIterator[Any]:
        async with self._stream_lines("/v1/chat", payload) as lines:
            yield iter_ndjson(lines)

    def _stream_engine(self) -> StreamEngine:
        return partial(
            reconstruct_event_stream,
            provider=self.name,
            finish_reasons=COHERE_FINISH_REASONS,
            usage_parser=parse_cohere_usage,
        )

    async def _fetch_models(self) -> List[ModelInfo]:
        data = await self._get_json("/v1/models")
        return [cohere_model_info(m) for m in get_list(data, "models")]

    # ----- Capabilities -----
    async def generate_embedding(self, request: EmbeddingRequest) -> EmbeddingResponse:
        model = request.model or COHERE_DEFAULT_EMBEDDING_MODEL
        payload = to_cohere_embed_payload(request, model)
        ctx = self._ctx(model, "embeddings")
        raw = await self._guarded("embedding generation", ctx, lambda: self._post_json("/v1/embed", payload))
        response = from_cohere_embedding(raw, model)
        normalized_log_event(
            self._logger,
            "embeddings.end",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=bool(response.embeddings),
            tokens=response.usage,
            count=len(response.embeddings),
        )
        return response

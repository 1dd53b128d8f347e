"""Gemini adapter over ``google-generativeai``.

The SDK is configured once per adapter with ``genai.configure`` and a
``GenerativeModel`` is built per call from the converted settings (system
instruction, tools and generation config are model-level arguments in this
SDK). Streaming consumes ``generate_content_async(stream=True)`` with the
whole-value reconstruction engine; the stream call is cancelled when the
consumer stops early. Model listing and embeddings use the
SDK's blocking calls in a worker thread.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from functools import partial
from typing import Any, AsyncIterator, Callable, Dict, List, Mapping, Optional

import google.generativeai as genai

from ..base.adapter_parts import BaseProviderAdapter, resolve_settings
from ..base.models import CompletionRequest, CompletionResponse, EmbeddingRequest, EmbeddingResponse, ModelInfo
from ..base.streaming import reconstruct_whole_value_stream
from ..base.streaming.driver import StreamEngine
from ..config.defaults import GEMINI_DEFAULT_EMBEDDING_MODEL
from .converters import to_gemini_payload
from .normalizers import GEMINI_FINISH_REASONS, from_gemini_embedding, from_gemini_response, gemini_model_info, parse_gemini_usage

__all__ = ["GeminiAdapter"]

ModelFactory = Callable[..., Any]


async def _release_stream(response: Any) -> None:
    """Stop the upstream stream call when the consumer is done with it."""
    # AsyncGenerateContentResponse keeps the gRPC stream call in ``_iterator``
    upstream = getattr(response, "_iterator", None)
    if upstream is None:
        upstream = response
    aclose = getattr(upstream, "aclose", None)
    if aclose is not None:
        await aclose()
        return
    cancel = getattr(upstream, "cancel", None)
    if cancel is not None:
        cancel()


class GeminiAdapter(BaseProviderAdapter):
    """Google Gemini adapter (chat, streaming, embeddings, model listing)."""

    name = "gemini"

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        model_factory: Optional[ModelFactory] = None,
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
        if self._api_key:
            genai.configure(api_key=self._api_key)
        self._model_factory = model_factory or genai.GenerativeModel

    def _build_model(self, payload: Dict[str, Any]) -> Any:
        kwargs = {k: v for k, v in payload.items() if k not in ("model", "contents")}
        return self._model_factory(model_name=payload["model"], **kwargs)

    def _request_options(self) -> Dict[str, Any]:
        return {"timeout": self._timeout_seconds} if self._timeout_seconds else {}

    # ----- Hooks -----
    def _build_payload(self, request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
        return to_gemini_payload(request)

    async def _send(self, payload: Dict[str, Any]) -> Any:
        return await self._build_model(payload).generate_content_async(
            payload["contents"], request_options=self._request_options()
        )

    def _normalize(self, raw: Any, request: CompletionRequest) -> CompletionResponse:
        return from_gemini_response(raw, default_model=request.model)

    @asynccontextmanager
    async def _open_stream(self, payload: Dict[str, Any]) -> AsyncIterator[Any]:
        response = await self._build_model(payload).generate_content_async(
            payload["contents"], stream=True, request_options=self._request_options()
        )
        try:
            yield response
        finally:
            await _release_stream(response)

    def _stream_engine(self) -> StreamEngine:
        return partial(
            reconstruct_whole_value_stream,
            provider=self.name,
            finish_reasons=GEMINI_FINISH_REASONS,
            usage_parser=parse_gemini_usage,
        )

    async def _fetch_models(self) -> List[ModelInfo]:
        raw = await asyncio.to_thread(lambda: list(genai.list_models()))
        return [gemini_model_info(m) for m in raw]

    # ----- Capabilities -----
    async def generate_embedding(self, request: EmbeddingRequest) -> EmbeddingResponse:
        model = request.model or GEMINI_DEFAULT_EMBEDDING_MODEL
        inputs = request.inputs()
        kwargs: Dict[str, Any] = {"model": model, "content": inputs[0] if len(inputs) == 1 else inputs}
        if request.input_type:
            kwargs["task_type"] = request.input_type
        if request.dimensions is not None:
            kwargs["output_dimensionality"] = request.dimensions
        raw = await self._guarded(
            "embedding generation",
            self._ctx(model, "embeddings"),
            lambda: asyncio.to_thread(genai.embed_content, **kwargs),
        )
        return from_gemini_embedding(raw, model, len(inputs))

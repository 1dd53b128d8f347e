"""OpenRouter adapter over raw ``httpx``.

OpenRouter speaks the chat-completions protocol, so payloads, normalization
and the index-addressed stream engine are shared with OpenAI. The transport
is plain ``httpx`` with SSE decoding; keep-alive comment lines are skipped
by :func:`iter_sse_json`.

Configuration keys beyond the common ones:
- ``site_url``: sent as ``HTTP-Referer``.
- ``app_name``: sent as ``X-Title``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import partial
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional

import httpx

from ..base.adapter_parts import BaseProviderAdapter, HttpTransportMixin, resolve_settings
from ..base.models import CompletionRequest, CompletionResponse, ModelInfo
from ..base.openai_style_parts import from_openai_response, parse_openai_usage
from ..base.streaming import iter_sse_json, reconstruct_index_stream
from ..base.streaming.driver import StreamEngine
from ..base.utils import get_list
from .converters import attribution_headers, to_openrouter_payload
from .normalizers import OPENROUTER_FINISH_REASONS, openrouter_model_info

__all__ = ["OpenRouterAdapter"]


class OpenRouterAdapter(HttpTransportMixin, BaseProviderAdapter):
    """Adapter for OpenRouter's OpenAI-compatible chat endpoint."""

    name = "openrouter"

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        site_url: Optional[str] = None,
        app_name: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        init, cfg = resolve_settings(
            self.name,
            model=model,
            api_key=api_key,
            base_url=base_url,
            headers=headers,
            timeout_seconds=timeout_seconds,
        )
        super().__init__(init)
        self._headers = attribution_headers(site_url or cfg.get("site_url"), app_name or cfg.get("app_name")) | self._headers
        self._http_client = http_client

    # ----- Hooks -----
    def _build_payload(self, request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
        return to_openrouter_payload(request, stream=stream)

    async def _send(self, payload: Dict[str, Any]) -> Any:
        return await self._post_json("/chat/completions", payload)

    def _normalize(self, raw: Any, request: CompletionRequest) -> CompletionResponse:
        return from_openai_response(raw, finish_reasons=OPENROUTER_FINISH_REASONS, default_model=request.model)

    @asynccontextmanager
    async def _open_stream(self, payload: Dict[str, Any]) -> AsyncIterator[Any]:
        async with self._stream_lines("/chat/completions", payload) as lines:
            yield iter_sse_json(lines)

    def _stream_engine(self) -> StreamEngine:
        return partial(
            reconstruct_index_stream,
            provider=self.name,
            finish_reasons=OPENROUTER_FINISH_REASONS,
            usage_parser=parse_openai_usage,
        )

    async def _fetch_models(self) -> List[ModelInfo]:
        data = await self._get_json("/models")
        return [openrouter_model_info(m) for m in get_list(data, "data")]

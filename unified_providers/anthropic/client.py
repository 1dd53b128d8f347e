"""Anthropic adapter over ``AsyncAnthropic``.

Authentication is either an API key or OAuth. With OAuth the SDK client is
built on an ``httpx.AsyncClient`` carrying :class:`OAuthBearerAuth`, which
replaces the key header with the bearer token and the OAuth beta headers on
every request; a placeholder key satisfies the SDK constructor.

Streaming uses the raw event stream (``messages.create(stream=True)``) and
the block-addressed reconstruction engine.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import partial
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Union

import httpx
from anthropic import AsyncAnthropic

from ..auth.oauth import AuthorizationRequest, DeviceAuthorization, OAuthBearerAuth, OAuthConfig, OAuthEngine, OAuthToken, anthropic_oauth_headers
from ..base.adapter_parts import BaseProviderAdapter, resolve_settings
from ..base.errors import validation_error
from ..base.http import get_timeout
from ..base.models import CompletionRequest, CompletionResponse, ModelInfo
from ..base.streaming import reconstruct_block_stream
from ..base.streaming.driver import StreamEngine
from .converters import to_anthropic_payload
from .normalizers import ANTHROPIC_FINISH_REASONS, anthropic_model_info, from_anthropic_response

__all__ = ["AnthropicAdapter"]

_OAUTH_PLACEHOLDER_KEY = "oauth"


class AnthropicAdapter(BaseProviderAdapter):
    """Claude adapter supporting API-key and OAuth authentication.

    Parameters:
        oauth: OAuth configuration; enables bearer authentication.
        oauth_engine: Prebuilt engine (takes precedence over ``oauth``).
        client: Prebuilt SDK client (tests inject fakes here).
    """

    name = "anthropic"

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        oauth: Optional[OAuthConfig] = None,
        oauth_engine: Optional[OAuthEngine] = None,
        client: Optional[Any] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
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
        if oauth_engine is None and oauth is not None:
            oauth.provider = self.name
            oauth_engine = OAuthEngine(oauth)
        self.oauth = oauth_engine
        self._client = client
        self._transport = transport

    def _make_client(self) -> AsyncAnthropic:
        timeout = httpx.Timeout(self._timeout_seconds) if self._timeout_seconds else get_timeout()
        kwargs: Dict[str, Any] = {"timeout": timeout, "max_retries": 0}
        if self._base_url:
            kwargs["base_url"] = self._base_url
        if self._headers:
            kwargs["default_headers"] = dict(self._headers)
        if self.oauth is not None:
            kwargs["api_key"] = _OAUTH_PLACEHOLDER_KEY
            kwargs["http_client"] = httpx.AsyncClient(
                auth=OAuthBearerAuth(self.oauth, anthropic_oauth_headers),
                timeout=timeout,
                transport=self._transport,
            )
        else:
            kwargs["api_key"] = self._api_key
        return AsyncAnthropic(**kwargs)

    def client(self) -> Any:
        if self._client is None:
            self._client = self._make_client()
        return self._client

    # ----- OAuth helpers -----
    def _require_oauth(self) -> OAuthEngine:
        if self.oauth is None:
            raise validation_error(self.name, "OAuth is not configured for this adapter")
        return self.oauth

    async def initiate_oauth(self) -> Union[AuthorizationRequest, DeviceAuthorization]:
        return await self._require_oauth().initiate_auth()

    async def complete_oauth(self, code: str, code_verifier: Optional[str] = None) -> OAuthToken:
        return await self._require_oauth().complete_auth(code, code_verifier)

    # ----- Hooks -----
    def _build_payload(self, request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:
        return to_anthropic_payload(request, stream=stream)

    async def _send(self, payload: Dict[str, Any]) -> Any:
        return await self.client().messages.create(**payload)

    def _normalize(self, raw: Any, request: CompletionRequest) -> CompletionResponse:
        return from_anthropic_response(raw, default_model=request.model)

    @asynccontextmanager
    async def _open_stream(self, payload: Dict[str, Any]) -> AsyncIterator[Any]:
        stream = await self.client().messages.create(**payload)
        try:
            yield stream
        finally:
            await stream.close()

    def _stream_engine(self) -> StreamEngine:
        return partial(reconstruct_block_stream, provider=self.name, finish_reasons=ANTHROPIC_FINISH_REASONS)

    async def _fetch_models(self) -> List[ModelInfo]:
        return [anthropic_model_info(m) async for m in self.client().models.list()]

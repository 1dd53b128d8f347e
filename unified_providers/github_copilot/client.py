"""GitHub Copilot adapter.

Copilot exposes an OpenAI-compatible API authenticated with a short-lived
token obtained from the stored GitHub OAuth token. The ``AsyncOpenAI`` client
is built on an ``httpx.AsyncClient`` whose :class:`OAuthBearerAuth` performs
the exchange and applies the editor headers on every request, so chat,
streaming and model listing are inherited unchanged.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx
from openai import AsyncOpenAI

from ..auth.oauth import InMemoryTokenStorage, OAuthBearerAuth, OAuthConfig, OAuthEngine, copilot_headers
from ..base.adapter_parts import resolve_settings
from ..base.http import get_timeout
from ..base.openai_style_parts import BaseOpenAIStyleAdapter
from .converters import COPILOT_TOOL_CHOICES
from .normalizers import COPILOT_FINISH_REASONS

__all__ = ["GitHubCopilotAdapter"]

# The SDK requires a key; the auth hook replaces the header it produces.
_PLACEHOLDER_KEY = "copilot-oauth"


class GitHubCopilotAdapter(BaseOpenAIStyleAdapter):
    """Copilot chat adapter authenticated through the device flow.

    Parameters:
        oauth: OAuth configuration; defaults to in-memory token storage.
        oauth_engine: Prebuilt engine (takes precedence over ``oauth``).
        http_client: Optional transport handed to the engine's token calls.
    """

    name = "github-copilot"
    finish_reasons = COPILOT_FINISH_REASONS
    tool_choices = COPILOT_TOOL_CHOICES
    stream_usage = False

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        oauth: Optional[OAuthConfig] = None,
        oauth_engine: Optional[OAuthEngine] = None,
        http_client: Optional[httpx.AsyncClient] = None,
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
        if oauth_engine is None:
            config = oauth or OAuthConfig(provider=self.name, token_storage=InMemoryTokenStorage())
            config.provider = self.name
            oauth_engine = OAuthEngine(config, http_client=http_client)
        self.oauth = oauth_engine
        self._transport = transport

    def _make_client(self) -> Any:
        timeout = httpx.Timeout(self._timeout_seconds) if self._timeout_seconds else get_timeout()
        http = httpx.AsyncClient(
            auth=OAuthBearerAuth(self.oauth, copilot_headers),
            timeout=timeout,
            transport=self._transport,
        )
        return AsyncOpenAI(
            api_key=_PLACEHOLDER_KEY,
            base_url=self._base_url,
            http_client=http,
            default_headers=dict(self._headers) or None,
            max_retries=0,
        )

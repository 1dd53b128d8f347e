"""``httpx.Auth`` integration of the OAuth engine.

Adapters that authenticate with OAuth construct their SDK's HTTP client with
an :class:`OAuthBearerAuth`; every outgoing request then resolves a fresh
bearer value and carries the vendor's required headers.
"""
from __future__ import annotations

import json
from typing import AsyncGenerator, Callable, Generator

import httpx

from ...config.defaults import ANTHROPIC_API_VERSION, ANTHROPIC_OAUTH_BETA, ANTHROPIC_OAUTH_USER_AGENT
from .copilot import copilot_editor_headers
from .engine import OAuthEngine

HeaderProfile = Callable[[httpx.Request, str], None]


def anthropic_oauth_headers(request: httpx.Request, token: str) -> None:
    """Replace API-key auth with the OAuth bearer and beta headers."""
    for name in ("x-api-key", "authorization"):
        request.headers.pop(name, None)
    beta = request.headers.get("anthropic-beta")
    if beta and ANTHROPIC_OAUTH_BETA not in beta:
        beta = f"{beta},{ANTHROPIC_OAUTH_BETA}"
    request.headers["authorization"] = f"Bearer {token}"
    request.headers["anthropic-beta"] = beta or ANTHROPIC_OAUTH_BETA
    request.headers["anthropic-version"] = ANTHROPIC_API_VERSION
    request.headers["user-agent"] = ANTHROPIC_OAUTH_USER_AGENT


def _initiator(content: bytes) -> str:
    """``agent`` when the conversation already has assistant or tool turns."""
    try:
        body = json.loads(content or b"{}")
    except ValueError:
        return "user"
    messages = body.get("messages") if isinstance(body, dict) else None
    for message in messages or []:
        if isinstance(message, dict) and message.get("role") in ("assistant", "tool"):
            return "agent"
    return "user"


def copilot_headers(request: httpx.Request, token: str) -> None:
    """Apply the Copilot API token and editor identification headers."""
    request.headers.pop("x-api-key", None)
    request.headers["Authorization"] = f"Bearer {token}"
    request.headers["Openai-Intent"] = "conversation-edits"
    request.headers["X-Initiator"] = _initiator(request.content)
    for name, value in copilot_editor_headers().items():
        request.headers[name] = value


class OAuthBearerAuth(httpx.Auth):
    """Resolve a bearer per request through an :class:`OAuthEngine`.

    Only async clients are supported; the engine's storage and refresh are
    coroutines.
    """

    requires_request_body = True

    def __init__(self, engine: OAuthEngine, profile: HeaderProfile) -> None:
        self._engine = engine
        self._profile = profile

    def sync_auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        raise RuntimeError("OAuthBearerAuth requires an httpx.AsyncClient")

    async def async_auth_flow(self, request: httpx.Request) -> AsyncGenerator[httpx.Request, httpx.Response]:
        token = await self._engine.get_access_token()
        self._profile(request, token)
        yield request


__all__ = ["OAuthBearerAuth", "HeaderProfile", "anthropic_oauth_headers", "copilot_headers"]

"""Authorization-code flow with PKCE (Anthropic)."""

from __future__ import annotations

import base64
import hashlib
import json
from urllib.parse import parse_qsl, urlsplit

import httpx
import pytest

from unified_providers.auth.oauth import (
    AuthorizationRequest,
    InMemoryTokenStorage,
    OAuthConfig,
    OAuthEngine,
    generate_code_challenge,
    generate_code_verifier,
)
from unified_providers.base.errors import ProviderError

from ..helpers import FakeClock, mock_client


def _engine(handler=None, storage=None, clock=None, **config) -> OAuthEngine:
    storage = storage or InMemoryTokenStorage()
    client = mock_client(handler) if handler is not None else None
    return OAuthEngine(
        OAuthConfig(provider="anthropic", token_storage=storage, **config),
        http_client=client,
        clock=clock or FakeClock(),
    )


def test_code_challenge_is_s256_of_verifier():
    verifier = generate_code_verifier()
    assert 43 <= len(verifier) <= 128 and "=" not in verifier  # nosec B101
    expected = base64.urlsafe_b64encode(hashlib.sha256(verifier.encode()).digest()).decode().rstrip("=")
    assert generate_code_challenge(verifier) == expected  # nosec B101


@pytest.mark.asyncio
async def test_initiate_builds_authorization_url(provider_logs):
    request = await _engine().initiate_auth()

    assert isinstance(request, AuthorizationRequest)  # nosec B101
    parts = urlsplit(request.url)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://claude.ai/oauth/authorize"  # nosec B101
    params = parse_qsl(parts.query)
    assert [k for k, _ in params] == [  # nosec B101
        "code",
        "client_id",
        "response_type",
        "redirect_uri",
        "scope",
        "code_challenge",
        "code_challenge_method",
        "state",
    ]
    values = dict(params)
    assert values["code"] == "true" and values["response_type"] == "code"  # nosec B101
    assert values["scope"] == "org:create_api_key user:profile user:inference"  # nosec B101
    assert values["redirect_uri"] == "https://console.anthropic.com/oauth/code/callback"  # nosec B101
    assert values["code_challenge"] == generate_code_challenge(request.code_verifier)  # nosec B101
    assert values["code_challenge_method"] == "S256"  # nosec B101
    assert values["state"] == request.code_verifier  # nosec B101
    assert provider_logs[-1]["event"] == "oauth.initiate"  # nosec B101
    assert request.code_verifier not in json.dumps(provider_logs)  # nosec B101


@pytest.mark.asyncio
async def test_complete_auth_splits_state_and_stores_token(provider_logs):
    sent = {}

    def handler(request: httpx.Request) -> httpx.Response:
        sent["url"] = str(request.url)
        sent["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"access_token": "at-1", "refresh_token": "rt-1", "expires_in": 3600, "scope": "user:inference", "token_type": "Bearer"},
        )

    storage = InMemoryTokenStorage()
    clock = FakeClock(1000.0)
    engine = _engine(handler, storage, clock)
    token = await engine.complete_auth("abc#xyz", "verifier-1")

    assert sent["url"] == "https://console.anthropic.com/v1/oauth/token"  # nosec B101
    assert sent["body"] == {  # nosec B101
        "code": "abc",
        "state": "xyz",
        "grant_type": "authorization_code",
        "client_id": "9d1c250a-e61b-44d9-88ed-5944d1962f5e",
        "redirect_uri": "https://console.anthropic.com/oauth/code/callback",
        "code_verifier": "verifier-1",
    }
    assert (token.access_token, token.refresh_token, token.expires_at) == ("at-1", "rt-1", 4600)  # nosec B101
    assert token.scopes == ["user:inference"]  # nosec B101
    assert await storage.get_tokens("anthropic") == token  # nosec B101
    assert await engine.has_tokens()  # nosec B101
    assert provider_logs[-1]["event"] == "oauth.exchange.success"  # nosec B101
    assert "at-1" not in json.dumps(provider_logs)  # nosec B101


@pytest.mark.asyncio
async def test_complete_auth_without_state_and_with_client_secret():
    sent = {}

    def handler(request: httpx.Request) -> httpx.Response:
        sent.update(json.loads(request.content))
        return httpx.Response(200, json={"access_token": "at-2"})

    token = await _engine(handler, client_secret="s3cret").complete_auth("plain-code", "v")
    assert "state" not in sent and sent["code"] == "plain-code"  # nosec B101
    assert sent["client_secret"] == "s3cret"  # nosec B101
    assert token.expires_at is None and token.scopes == ["org:create_api_key", "user:profile", "user:inference"]  # nosec B101


@pytest.mark.asyncio
async def test_rejected_exchange_raises_vendor_error_type(provider_logs):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "invalid_grant", "error_description": "Code expired"})

    storage = InMemoryTokenStorage()
    with pytest.raises(ProviderError) as info:
        await _engine(handler, storage).complete_auth("abc", "v")

    error = info.value
    assert error.code == "invalid_grant" and error.http_status == 400  # nosec B101
    assert error.is_oauth_error() and error.oauth_error.description == "Code expired"  # nosec B101
    assert error.get_user_message() == "Invalid OAuth grant. Please re-authenticate."  # nosec B101
    assert not await storage.has_tokens("anthropic")  # nosec B101
    assert provider_logs[-1]["event"] == "oauth.exchange.error"  # nosec B101


@pytest.mark.asyncio
async def test_transport_failure_is_a_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(ProviderError) as info:
        await _engine(handler).complete_auth("abc", "v")
    assert info.value.code == "network_error" and info.value.is_retryable()  # nosec B101


def test_unknown_provider_is_invalid_client():
    with pytest.raises(ProviderError) as info:
        OAuthEngine(OAuthConfig(provider="openai", token_storage=InMemoryTokenStorage()))
    assert info.value.code == "invalid_client"  # nosec B101
    assert info.value.get_user_message() == "Invalid OAuth client configuration."  # nosec B101

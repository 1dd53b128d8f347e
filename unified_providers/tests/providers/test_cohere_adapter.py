from __future__ import annotations

import json

import httpx
import pytest

from unified_providers.base.errors import ProviderError
from unified_providers.base.models import CompletionRequest, EmbeddingRequest, Message
from unified_providers.cohere import CohereAdapter

from ..helpers import collect, mock_client, ndjson_body

BASE = "https://api.cohere.com"


def _adapter(handler) -> CohereAdapter:
    return CohereAdapter(model="command-r-plus", api_key="co-test", http_client=mock_client(handler, BASE))


@pytest.mark.asyncio
async def test_completion_normalizes_text_tool_calls_and_billed_units():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert request.url.path == "/v1/chat"  # nosec B101
        assert request.headers["authorization"] == "Bearer co-test"  # nosec B101
        assert body["message"] == "What's 2+2?"  # nosec B101
        return httpx.Response(
            200,
            json={
                "generation_id": "gen-c1",
                "text": "4",
                "finish_reason": "COMPLETE",
                "tool_calls": [{"name": "calc", "parameters": {"expr": "2+2"}}],
                "meta": {"billed_units": {"input_tokens": 6, "output_tokens": 1}},
            },
        )

    response = await _adapter(handler).generate_completion(
        CompletionRequest(model="", messages=[Message.user("What's 2+2?")])
    )
    assert response.id == "gen-c1" and response.content == "4"  # nosec B101
    assert response.model == "command-r-plus"  # nosec B101
    assert response.finish_reason == "tool_calls"  # nosec B101
    assert response.tool_calls[0].arguments == {"expr": "2+2"}  # nosec B101
    assert response.usage.total_tokens == 7  # nosec B101


@pytest.mark.asyncio
async def test_stream_decodes_ndjson_events():
    body = ndjson_body(
        {"event_type": "stream-start", "generation_id": "gen-c2"},
        {"event_type": "text-generation", "text": "Hello"},
        {"event_type": "text-generation", "text": " there"},
        {"event_type": "stream-end", "finish_reason": "COMPLETE", "response": {"meta": {"billed_units": {"input_tokens": 3, "output_tokens": 2}}}},
    )

    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content)["stream"] is True  # nosec B101
        return httpx.Response(200, content=body)

    chunks = await collect(_adapter(handler).stream_completion(CompletionRequest(model="", messages=[Message.user("hi")])))
    assert "".join(c.delta for c in chunks) == "Hello there"  # nosec B101
    assert chunks[-1].finished and chunks[-1].usage.total_tokens == 5  # nosec B101
    assert {c.id for c in chunks} == {"gen-c2"}  # nosec B101


@pytest.mark.asyncio
async def test_validation_runs_before_network():
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must not run
        raise AssertionError("network must not be touched")

    request = CompletionRequest(model="m", messages=[Message.user("hi"), Message.assistant("yo")])
    with pytest.raises(ProviderError) as info:
        await _adapter(handler).generate_completion(request)
    assert info.value.code == "validation_error"  # nosec B101


@pytest.mark.asyncio
async def test_unauthorized_maps_to_auth_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "invalid api token"})

    with pytest.raises(ProviderError) as info:
        await _adapter(handler).generate_completion(CompletionRequest(model="", messages=[Message.user("x")]))
    assert info.value.code == "auth_error"  # nosec B101
    assert info.value.get_user_message() == "Authentication failed. Please check your API key."  # nosec B101


@pytest.mark.asyncio
async def test_embeddings(provider_logs):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert request.url.path == "/v1/embed"  # nosec B101
        assert body == {"model": "embed-english-v3.0", "texts": ["a", "b"], "input_type": "search_query", "embedding_types": ["float"]}  # nosec B101
        return httpx.Response(
            200,
            json={"embeddings": {"float": [[0.1, 0.2], [0.3, 0.4]]}, "meta": {"billed_units": {"input_tokens": 2}}},
        )

    response = await _adapter(handler).generate_embedding(
        EmbeddingRequest(model="embed-english-v3.0", input=["a", "b"], input_type="search_query")
    )
    assert response.embeddings == [[0.1, 0.2], [0.3, 0.4]]  # nosec B101
    assert response.usage.prompt_tokens == 2  # nosec B101
    assert provider_logs[-1]["event"] == "embeddings.end" and provider_logs[-1]["count"] == 2  # nosec B101


@pytest.mark.asyncio
async def test_list_models():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"models": [{"name": "command-r", "endpoints": ["chat"], "features": ["tools"], "context_length": 128000}]})

    (info,) = await _adapter(handler).list_models()
    assert (info.id, info.provider, info.context_length) == ("command-r", "cohere", 128000)  # nosec B101
    assert info.capabilities["tools"] and not info.capabilities["embeddings"]  # nosec B101

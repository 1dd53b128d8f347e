"""OpenRouter adapter against an ``httpx.MockTransport``."""

from __future__ import annotations

import json

import httpx
import pytest

from unified_providers.base.errors import ProviderError
from unified_providers.base.models import CompletionRequest, ContentPart, Message, ToolDefinition
from unified_providers.base.streaming import collect_stream
from unified_providers.openrouter import OpenRouterAdapter

from ..helpers import TrackingStream, async_iter, collect, mock_client, sse_body

BASE = "https://openrouter.ai/api/v1"


def _adapter(handler, **kwargs) -> OpenRouterAdapter:
    return OpenRouterAdapter(
        model="openai/gpt-4o-mini",
        api_key="sk-or-test",
        http_client=mock_client(handler, BASE),
        **kwargs,
    )


def _request(**kwargs) -> CompletionRequest:
    return CompletionRequest(model="", messages=[Message.user("hello")], **kwargs)


@pytest.mark.asyncio
async def test_completion_sends_auth_and_attribution_headers(provider_logs):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "id": "gen-1",
                "model": "openai/gpt-4o-mini",
                "choices": [{"message": {"role": "assistant", "content": "Hi there"}, "finish_reason": "stop"}],
                "usage": {"prompt_tokens": 5, "completion_tokens": 2},
            },
        )

    adapter = _adapter(handler, site_url="https://app.example", app_name="Demo App")
    response = await adapter.generate_completion(_request())

    assert seen["url"] == f"{BASE}/chat/completions"  # nosec B101
    assert seen["headers"]["authorization"] == "Bearer sk-or-test"  # nosec B101
    assert seen["headers"]["http-referer"] == "https://app.example"  # nosec B101
    assert seen["headers"]["x-title"] == "Demo App"  # nosec B101
    assert seen["body"]["model"] == "openai/gpt-4o-mini"  # nosec B101
    assert response.content == "Hi there" and response.id == "gen-1"  # nosec B101
    assert response.usage.total_tokens == 7  # nosec B101
    assert [e["event"] for e in provider_logs] == ["chat.start", "chat.end"]  # nosec B101
    assert "sk-or-test" not in json.dumps(provider_logs)  # nosec B101


@pytest.mark.asyncio
async def test_streamed_tool_call_reassembles_from_fragments():
    body = sse_body(
        {"id": "gen-2", "choices": [{"delta": {"tool_calls": [{"index": 0, "id": "call_1", "function": {"name": "get_weather", "arguments": '{"ci'}}]}}]},
        {"id": "gen-2", "choices": [{"delta": {"tool_calls": [{"index": 0, "function": {"arguments": 'ty": "Bo'}}]}}]},
        {"id": "gen-2", "choices": [{"delta": {"tool_calls": [{"index": 0, "function": {"arguments": 'ston"}'}}]}, "finish_reason": "tool_calls"}]},
        {"id": "gen-2", "choices": [], "usage": {"prompt_tokens": 20, "completion_tokens": 9}},
    )

    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content)["stream_options"] == {"include_usage": True}  # nosec B101
        return httpx.Response(200, content=b": OPENROUTER PROCESSING\n\n" + body, headers={"content-type": "text/event-stream"})

    tool = ToolDefinition(name="get_weather", parameters={"type": "object", "properties": {"city": {"type": "string"}}})
    chunks = await collect(_adapter(handler).stream_completion(_request(tools=[tool])))

    assert sum(c.finished for c in chunks) == 1 and chunks[-1].finished  # nosec B101
    assert all(c.usage is None for c in chunks[:-1])  # nosec B101
    assert chunks[-1].usage.total_tokens == 29  # nosec B101
    assert chunks[-1].partial_tool_calls[0].arguments_text == '{"city": "Boston"}'  # nosec B101

    response = await collect_stream(async_iter(chunks))
    assert response.tool_calls[0].arguments == {"city": "Boston"}  # nosec B101
    assert response.finish_reason == "tool_calls"  # nosec B101


@pytest.mark.asyncio
async def test_rate_limit_status_is_classified_and_retryable(provider_logs):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": {"message": "Rate limit exceeded", "code": 429}})

    with pytest.raises(ProviderError) as info:
        await _adapter(handler).generate_completion(_request())

    error = info.value
    assert error.code == "rate_limit_error"  # nosec B101
    assert error.http_status == 429 and error.is_retryable()  # nosec B101
    assert error.provider == "openrouter"  # nosec B101
    assert error.get_user_message() == "Rate limit exceeded. Please try again later."  # nosec B101
    assert provider_logs[-1]["event"] == "chat.error"  # nosec B101
    assert provider_logs[-1]["retryable"] is True  # nosec B101


@pytest.mark.asyncio
async def test_vendor_error_type_from_body_wins_over_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"type": "context_length_exceeded", "message": "too long"}})

    with pytest.raises(ProviderError) as info:
        await _adapter(handler).generate_completion(_request())
    assert info.value.code == "context_length_exceeded"  # nosec B101
    assert not info.value.is_retryable()  # nosec B101


@pytest.mark.asyncio
async def test_early_close_releases_the_http_response(provider_logs):
    tracking = TrackingStream(
        [
            sse_body({"id": "gen-3", "choices": [{"delta": {"content": "one"}}]}, done=False),
            sse_body({"id": "gen-3", "choices": [{"delta": {"content": "two"}}]}, done=False),
            sse_body({"id": "gen-3", "choices": [{"delta": {"content": "three"}}]}),
        ]
    )

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, stream=tracking, headers={"content-type": "text/event-stream"})

    stream = _adapter(handler).stream_completion(_request())
    first = await stream.__anext__()
    await stream.aclose()

    assert first.delta == "one"  # nosec B101
    assert tracking.closed  # nosec B101
    assert provider_logs[-1]["event"] == "stream.cancelled"  # nosec B101


@pytest.mark.asyncio
async def test_mid_stream_error_event_raises_after_delivered_text():
    body = sse_body(
        {"id": "gen-4", "choices": [{"delta": {"content": "partial"}}]},
        {"error": {"code": "server_error", "message": "Provider returned error"}},
    )

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body)

    received = []
    with pytest.raises(ProviderError) as info:
        async for chunk in _adapter(handler).stream_completion(_request()):
            received.append(chunk.delta)
    assert received == ["partial"]  # nosec B101
    assert info.value.code == "server_error" and info.value.is_retryable() is False  # nosec B101


@pytest.mark.asyncio
async def test_unsupported_content_fails_before_any_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must not run
        calls.append(request)
        return httpx.Response(500)

    request = CompletionRequest(model="m", messages=[Message.user([ContentPart.of_video("https://x/v.mp4")])])
    with pytest.raises(ProviderError):
        await _adapter(handler).generate_completion(request)
    with pytest.raises(ProviderError):
        await collect(_adapter(handler).stream_completion(request))
    assert calls == []  # nosec B101


@pytest.mark.asyncio
async def test_list_models_maps_architecture():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/models"  # nosec B101
        return httpx.Response(
            200,
            json={
                "data": [
                    {
                        "id": "anthropic/claude-3.5-sonnet",
                        "name": "Claude 3.5 Sonnet",
                        "context_length": 200000,
                        "architecture": {"modality": "text+image->text", "input_modalities": ["text", "image"]},
                        "supported_parameters": ["tools", "temperature"],
                    }
                ]
            },
        )

    adapter = _adapter(handler)
    (info,) = await adapter.list_models()
    assert info.provider == "openrouter" and info.context_length == 200000  # nosec B101
    assert info.capabilities["vision"] and info.capabilities["tools"]  # nosec B101
    assert (await adapter.get_model("missing/model")) is None  # nosec B101

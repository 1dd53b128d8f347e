"""OpenAI adapter with an injected fake ``AsyncOpenAI`` client."""

from __future__ import annotations

from types import SimpleNamespace

import httpx
import openai
import pytest

from unified_providers.base.errors import ProviderError
from unified_providers.base.models import AudioRequest, CompletionRequest, EmbeddingRequest, ImageRequest, Message, ToolDefinition
from unified_providers.openai import OpenAIAdapter

from ..helpers import FakeSdkStream, async_iter, collect

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


class FakeOpenAI:
    """Records calls and answers from canned values."""

    def __init__(self, *, completion=None, stream=None, error=None):
        self.calls = []
        self._completion = completion
        self._stream = stream
        self._error = error
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))
        self.embeddings = SimpleNamespace(create=self._record("embeddings", {"data": [{"embedding": [0.1, 0.2]}], "usage": {"prompt_tokens": 3}}))
        self.images = SimpleNamespace(
            generate=self._record("images", {"created": 1700000000, "data": [{"url": "https://img.example/1.png", "revised_prompt": "a cat"}]})
        )
        self.audio = SimpleNamespace(speech=SimpleNamespace(create=self._record("speech", SimpleNamespace(content=b"ID3audio"))))
        self.models = SimpleNamespace(list=lambda: async_iter([{"id": "gpt-4o"}, {"id": "gpt-4o-mini"}]))

    def _record(self, name, result):
        async def call(**kwargs):
            self.calls.append((name, kwargs))
            return result

        return call

    async def _create(self, **kwargs):
        self.calls.append(("chat", kwargs))
        if self._error is not None:
            raise self._error
        return self._stream if kwargs.get("stream") else self._completion


def _adapter(client) -> OpenAIAdapter:
    return OpenAIAdapter(model="gpt-4o-mini", api_key="sk-test", client=client)


@pytest.mark.asyncio
async def test_completion_with_tool_calls(provider_logs):
    client = FakeOpenAI(
        completion={
            "id": "chatcmpl-1",
            "model": "gpt-4o-mini-2024-07-18",
            "choices": [
                {
                    "message": {
                        "content": None,
                        "tool_calls": [{"id": "call_9", "type": "function", "function": {"name": "lookup", "arguments": '{"q": "x"}'}}],
                    },
                    "finish_reason": "tool_calls",
                }
            ],
            "usage": {"prompt_tokens": 10, "completion_tokens": 5, "prompt_tokens_details": {"cached_tokens": 4}},
        }
    )
    response = await _adapter(client).generate_completion(CompletionRequest(model="", messages=[Message.user("x")]))

    name, payload = client.calls[0]
    assert name == "chat" and payload["model"] == "gpt-4o-mini"  # nosec B101
    assert response.model == "gpt-4o-mini-2024-07-18"  # nosec B101
    assert response.finish_reason == "tool_calls"  # nosec B101
    assert response.tool_calls[0].arguments == {"q": "x"}  # nosec B101
    assert response.usage.cached_tokens == 4  # nosec B101
    end = provider_logs[-1]
    assert end["event"] == "chat.end" and end["tokens"]["total_tokens"] == 15  # nosec B101


@pytest.mark.asyncio
async def test_stream_aclose_releases_sdk_stream():
    stream = FakeSdkStream([{"id": "c-3", "choices": [{"delta": {"content": "a"}}]}, {"id": "c-3", "choices": [{"delta": {"content": "b"}}]}])
    client = FakeOpenAI(stream=stream)
    chunks = _adapter(client).stream_completion(CompletionRequest(model="", messages=[Message.user("x")]))
    first = await chunks.__anext__()
    await chunks.aclose()

    assert first.delta == "a"  # nosec B101
    assert stream.closed  # nosec B101
    assert client.calls[0][1]["stream_options"] == {"include_usage": True}  # nosec B101


@pytest.mark.asyncio
async def test_sdk_status_error_is_wrapped():
    error = openai.AuthenticationError(
        "Incorrect API key provided",
        response=httpx.Response(401, request=_REQUEST),
        body=None,
    )
    with pytest.raises(ProviderError) as info:
        await _adapter(FakeOpenAI(error=error)).generate_completion(CompletionRequest(model="", messages=[Message.user("x")]))

    assert info.value.code == "auth_error" and info.value.http_status == 401  # nosec B101
    assert info.value.cause is error  # nosec B101
    assert not info.value.is_retryable()  # nosec B101


@pytest.mark.asyncio
async def test_normalizer_failure_is_wrapped_and_logged(provider_logs, monkeypatch):
    adapter = _adapter(FakeOpenAI(completion={"id": "chatcmpl-2"}))

    def broken(raw, request):
        raise KeyError("choices")

    monkeypatch.setattr(adapter, "_normalize", broken)
    with pytest.raises(ProviderError) as info:
        await adapter.generate_completion(CompletionRequest(model="", messages=[Message.user("x")]))

    assert info.value.code == "unknown_error"  # nosec B101
    assert isinstance(info.value.cause, KeyError)  # nosec B101
    assert provider_logs[-1]["event"] == "chat.error"  # nosec B101
    assert provider_logs[-1]["error_code"] == "unknown_error"  # nosec B101


@pytest.mark.asyncio
async def test_unknown_tool_choice_fails_before_sending():
    client = FakeOpenAI(completion={"id": "chatcmpl-3"})
    request = CompletionRequest(
        model="",
        messages=[Message.user("x")],
        tools=[ToolDefinition(name="lookup")],
        tool_choice="sometimes",  # type: ignore[arg-type]
    )
    with pytest.raises(ProviderError) as info:
        await _adapter(client).generate_completion(request)

    assert info.value.code == "validation_error"  # nosec B101
    assert client.calls == []  # nosec B101


@pytest.mark.asyncio
async def test_sdk_connection_error_is_retryable():
    error = openai.APIConnectionError(request=_REQUEST)
    with pytest.raises(ProviderError) as info:
        await collect(_adapter(FakeOpenAI(error=error)).stream_completion(CompletionRequest(model="", messages=[Message.user("x")])))
    assert info.value.code == "network_error" and info.value.is_retryable()  # nosec B101


@pytest.mark.asyncio
async def test_embeddings_images_and_audio():
    client = FakeOpenAI()
    adapter = _adapter(client)

    embedding = await adapter.generate_embedding(EmbeddingRequest(model="", input="hello", dimensions=256))
    assert embedding.embeddings == [[0.1, 0.2]] and embedding.model == "text-embedding-3-small"  # nosec B101
    assert client.calls[-1] == ("embeddings", {"model": "text-embedding-3-small", "input": ["hello"], "dimensions": 256})  # nosec B101

    images = await adapter.generate_image(ImageRequest(prompt="a cat", model="", size="1024x1024"))
    assert images.images[0].url == "https://img.example/1.png" and images.created == 1700000000  # nosec B101
    assert client.calls[-1][1]["model"] == "dall-e-3"  # nosec B101

    audio = await adapter.generate_audio(AudioRequest(text="hi", model="", voice="nova", format="opus"))
    assert audio.audio == b"ID3audio" and audio.format == "opus"  # nosec B101
    assert client.calls[-1][1] == {"model": "tts-1", "input": "hi", "voice": "nova", "response_format": "opus"}  # nosec B101


@pytest.mark.asyncio
async def test_list_models():
    models = await _adapter(FakeOpenAI()).list_models()
    assert [m.id for m in models] == ["gpt-4o", "gpt-4o-mini"]  # nosec B101
    assert {m.provider for m in models} == {"openai"}  # nosec B101


def test_default_client_is_built_lazily():
    adapter = OpenAIAdapter(model="gpt-4o", api_key="sk-lazy", base_url="https://proxy.example/v1", organization="org-1")
    client = adapter.client()
    assert isinstance(client, openai.AsyncOpenAI)  # nosec B101
    assert str(client.base_url).startswith("https://proxy.example/v1")  # nosec B101
    assert client.organization == "org-1" and client.max_retries == 0  # nosec B101
    assert adapter.client() is client  # nosec B101

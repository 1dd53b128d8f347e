"""GitHub Copilot adapter through the real ``openai`` SDK over a mock transport."""

from __future__ import annotations

import json

import httpx
import pytest

from unified_providers.auth.oauth import InMemoryTokenStorage, OAuthConfig, OAuthToken
from unified_providers.base.errors import ProviderError
from unified_providers.base.models import CompletionRequest, Message, ToolCall
from unified_providers.github_copilot import GitHubCopilotAdapter

from ..helpers import collect, mock_client, sse_body

TOKEN_URL = "https://api.github.com/copilot_internal/v2/token"


def _chunk(delta: dict, finish_reason=None) -> dict:
    return {
        "id": "cc-stream",
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": "gpt-4o",
        "choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}],
    }


class CopilotBackend:
    """Answers both the token exchange and the chat endpoint."""

    def __init__(self, chat_response: httpx.Response, exchange_status: int = 200):
        self.chat_response = chat_response
        self.exchange_status = exchange_status
        self.exchanges = 0
        self.chat_requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == TOKEN_URL:
            self.exchanges += 1
            assert request.headers["authorization"] == "Bearer gho_github"  # nosec B101
            if self.exchange_status != 200:
                return httpx.Response(self.exchange_status, json={"message": "Bad credentials"})
            return httpx.Response(200, json={"token": f"copilot-{self.exchanges}", "expires_at": 1700001800})
        self.chat_requests.append(request)
        return self.chat_response


async def _adapter(backend: CopilotBackend, *, stored: bool = True) -> GitHubCopilotAdapter:
    storage = InMemoryTokenStorage()
    if stored:
        await storage.store_tokens("github-copilot", OAuthToken(access_token="gho_github"))
    return GitHubCopilotAdapter(
        oauth=OAuthConfig(provider="github-copilot", token_storage=storage),
        http_client=mock_client(backend),
        transport=httpx.MockTransport(backend),
    )


COMPLETION = {
    "id": "cc-1",
    "object": "chat.completion",
    "created": 1700000000,
    "model": "gpt-4o",
    "choices": [{"index": 0, "message": {"role": "assistant", "content": "Hello"}, "finish_reason": "stop"}],
    "usage": {"prompt_tokens": 2, "completion_tokens": 1, "total_tokens": 3},
}


@pytest.mark.asyncio
async def test_each_request_exchanges_a_fresh_copilot_token():
    backend = CopilotBackend(httpx.Response(200, json=COMPLETION))
    adapter = await _adapter(backend)

    first = await adapter.generate_completion(CompletionRequest(model="", messages=[Message.user("hi")]))
    follow_up = [
        Message.user("hi"),
        Message.assistant("Hello"),
        Message.user("again"),
    ]
    await adapter.generate_completion(CompletionRequest(model="", messages=follow_up))

    assert first.content == "Hello" and first.usage.total_tokens == 3  # nosec B101
    assert backend.exchanges == 2  # nosec B101
    one, two = backend.chat_requests
    assert str(one.url) == "https://api.githubcopilot.com/chat/completions"  # nosec B101
    assert one.headers["authorization"] == "Bearer copilot-1"  # nosec B101
    assert two.headers["authorization"] == "Bearer copilot-2"  # nosec B101
    assert one.headers["x-initiator"] == "user" and two.headers["x-initiator"] == "agent"  # nosec B101
    assert one.headers["copilot-integration-id"] == "vscode-chat"  # nosec B101
    assert json.loads(one.content)["model"] == "gpt-4o"  # nosec B101


@pytest.mark.asyncio
async def test_stream_reassembles_tool_call_fragments_without_usage_option():
    body = sse_body(
        _chunk({"role": "assistant", "tool_calls": [{"index": 0, "id": "call_1", "type": "function", "function": {"name": "read_file", "arguments": ""}}]}),
        _chunk({"tool_calls": [{"index": 0, "function": {"arguments": '{"path": '}}]}),
        _chunk({"tool_calls": [{"index": 0, "function": {"arguments": '"a.py"}'}}]}),
        _chunk({}, finish_reason="tool_calls"),
    )
    backend = CopilotBackend(httpx.Response(200, content=body, headers={"content-type": "text/event-stream"}))
    adapter = await _adapter(backend)
    request = CompletionRequest(
        model="",
        messages=[
            Message.user("open it"),
            Message.assistant(tool_calls=[ToolCall(id="call_0", name="list_files", arguments={})]),
            Message.tool("call_0", "a.py"),
        ],
    )
    chunks = await collect(adapter.stream_completion(request))

    sent = json.loads(backend.chat_requests[0].content)
    assert sent["stream"] is True and "stream_options" not in sent  # nosec B101
    assert backend.chat_requests[0].headers["x-initiator"] == "agent"  # nosec B101
    terminal = chunks[-1]
    assert terminal.finished and terminal.finish_reason == "tool_calls"  # nosec B101
    (partial,) = terminal.partial_tool_calls
    assert (partial.id, partial.name, partial.arguments_text) == ("call_1", "read_file", '{"path": "a.py"}')  # nosec B101


@pytest.mark.asyncio
async def test_missing_github_token_is_access_denied():
    backend = CopilotBackend(httpx.Response(200, json=COMPLETION))
    adapter = await _adapter(backend, stored=False)

    with pytest.raises(ProviderError) as info:
        await adapter.generate_completion(CompletionRequest(model="", messages=[Message.user("hi")]))
    assert info.value.code == "access_denied"  # nosec B101
    assert backend.chat_requests == []  # nosec B101


@pytest.mark.asyncio
async def test_rejected_exchange_is_request_failed():
    backend = CopilotBackend(httpx.Response(200, json=COMPLETION), exchange_status=401)
    adapter = await _adapter(backend)

    with pytest.raises(ProviderError) as info:
        await adapter.generate_completion(CompletionRequest(model="", messages=[Message.user("hi")]))
    assert info.value.code == "request_failed" and info.value.http_status == 401  # nosec B101

from __future__ import annotations

import pytest

from unified_providers.base.errors import ProviderError
from unified_providers.base.models import CompletionRequest, ContentPart, Message, NamedToolChoice, ResponseFormat, ToolCall, ToolDefinition
from unified_providers.gemini.converters import to_gemini_payload, to_gemini_tool_config

TOOL = ToolDefinition(name="get_time", description="Clock", parameters={"type": "object", "properties": {}})


def test_contents_roles_and_function_response_name():
    messages = [
        Message.system("Answer in French."),
        Message.user("Quelle heure?"),
        Message.assistant(tool_calls=[ToolCall(id="c1", name="get_time", arguments={"tz": "CET"})]),
        Message.tool("c1", "14:00"),
    ]
    payload = to_gemini_payload(CompletionRequest(model="gemini-1.5-pro", messages=messages, tools=[TOOL]))

    assert payload["system_instruction"] == "Answer in French."  # nosec B101
    assert [c["role"] for c in payload["contents"]] == ["user", "model", "function"]  # nosec B101
    assert payload["contents"][1]["parts"] == [{"function_call": {"name": "get_time", "args": {"tz": "CET"}}}]  # nosec B101
    assert payload["contents"][2]["parts"][0]["function_response"] == {"name": "get_time", "response": {"result": "14:00"}}  # nosec B101
    assert payload["tools"][0]["function_declarations"][0]["name"] == "get_time"  # nosec B101
    assert payload["tool_config"] == {"function_calling_config": {"mode": "AUTO"}}  # nosec B101


def test_named_tool_choice_restricts_allowed_functions():
    assert to_gemini_tool_config(NamedToolChoice("get_time")) == {  # nosec B101
        "function_calling_config": {"mode": "ANY", "allowed_function_names": ["get_time"]}
    }
    assert to_gemini_tool_config("none") == {"function_calling_config": {"mode": "NONE"}}  # nosec B101


def test_inline_media_is_decoded_to_bytes():
    content = [ContentPart.of_text("describe"), ContentPart.of_audio("aGVsbG8=", mime_type="audio/mp3")]
    payload = to_gemini_payload(CompletionRequest(model="m", messages=[Message.user(content)]))
    inline = payload["contents"][0]["parts"][1]["inline_data"]
    assert inline == {"mime_type": "audio/mp3", "data": b"hello"}  # nosec B101


def test_remote_media_is_rejected():
    request = CompletionRequest(model="m", messages=[Message.user([ContentPart.of_image("https://example.com/x.png")])])
    with pytest.raises(ProviderError) as info:
        to_gemini_payload(request)
    assert info.value.code == "unsupported_content"  # nosec B101


def test_generation_config_maps_sampling_and_schema():
    request = CompletionRequest(
        model="m",
        messages=[Message.user("x")],
        temperature=0.1,
        max_tokens=64,
        stop=["\n\n"],
        response_format=ResponseFormat(type="json_schema", json_schema={"name": "r", "schema": {"type": "object"}}),
    )
    config = to_gemini_payload(request)["generation_config"]
    assert config == {  # nosec B101
        "temperature": 0.1,
        "max_output_tokens": 64,
        "stop_sequences": ["\n\n"],
        "response_mime_type": "application/json",
        "response_schema": {"type": "object"},
    }


def _with_image(role: str, **kwargs) -> Message:
    return Message(role=role, content=[ContentPart.of_text("r"), ContentPart.of_image("data:image/png;base64,iVBORw0KGgo=")], **kwargs)


@pytest.mark.parametrize(
    "messages",
    [
        [_with_image("system"), Message.user("hi")],
        [
            Message.user("time?"),
            Message.assistant(tool_calls=[ToolCall(id="c1", name="get_time", arguments={})]),
            _with_image("tool", tool_call_id="c1"),
        ],
    ],
    ids=["system", "tool"],
)
def test_media_outside_user_turns_is_rejected(messages):
    with pytest.raises(ProviderError) as info:
        to_gemini_payload(CompletionRequest(model="m", messages=messages, tools=[TOOL]))
    assert info.value.code == "unsupported_content"  # nosec B101

"""Unified data model: DTO invariants and helpers."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from unified_providers.base.errors import ProviderError
from unified_providers.base.models import (
    CompletionChunk,
    CompletionRequest,
    ContentPart,
    Message,
    ModelInfo,
    NamedToolChoice,
    ResponseFormat,
    TokenUsage,
    ToolCall,
    map_finish_reason,
    tool_choice_mode,
)
from unified_providers.base.utils import coerce_arguments, dump_arguments, get_field, get_path, new_id, parse_arguments


def test_token_usage_total_excludes_cached_and_reasoning():
    usage = TokenUsage.of(100, 20, cached=60, reasoning=8)
    assert usage.total_tokens == 120  # nosec B101
    assert usage.to_dict() == {  # nosec B101
        "prompt_tokens": 100,
        "completion_tokens": 20,
        "total_tokens": 120,
        "cached_tokens": 60,
        "reasoning_tokens": 8,
    }
    assert TokenUsage.of(None, None).to_dict() == {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0}  # nosec B101


def test_usage_is_rejected_on_non_terminal_chunk():
    with pytest.raises(ValueError):
        CompletionChunk(id="c", delta="x", usage=TokenUsage.of(1, 1))
    terminal = CompletionChunk(id="c", finished=True, usage=TokenUsage.of(1, 1), finish_reason="stop")
    assert terminal.usage.total_tokens == 2  # nosec B101


def test_message_constructors_and_text_join():
    parts = [ContentPart.of_text("look "), ContentPart.of_image("https://i.example/a.png"), ContentPart.of_text("here")]
    message = Message.user(parts)
    assert message.is_structured() and message.text_or_joined() == "look here"  # nosec B101
    assert Message.tool("call_1", "42").tool_call_id == "call_1"  # nosec B101
    call = ToolCall(id="call_1", name="f", arguments={"x": 1})
    assert Message.assistant(tool_calls=[call]).tool_calls == [call]  # nosec B101
    assert call.to_dict() == {"id": "call_1", "name": "f", "arguments": {"x": 1}}  # nosec B101


def test_content_part_to_dict_prunes_none():
    assert ContentPart.of_document("JVBERi0=", mime_type="application/pdf").to_dict() == {  # nosec B101
        "type": "document",
        "url": "JVBERi0=",
        "mime_type": "application/pdf",
    }


@pytest.mark.parametrize(
    "choice, mode",
    [(None, "auto"), ("auto", "auto"), ("none", "none"), ("required", "required"), (NamedToolChoice("f"), "named")],
)
def test_tool_choice_mode(choice, mode):
    assert tool_choice_mode(choice) == mode  # nosec B101


def test_tool_choice_mode_rejects_unknown_value():
    with pytest.raises(ProviderError) as info:
        tool_choice_mode("sometimes", "openai")  # type: ignore[arg-type]
    assert info.value.code == "validation_error" and info.value.provider == "openai"  # nosec B101


def test_map_finish_reason_defaults_to_stop():
    table = {"length": "length", "MAX_TOKENS": "length"}
    assert map_finish_reason(table, "length") == "length"  # nosec B101
    assert map_finish_reason(table, SimpleNamespace(name="MAX_TOKENS")) == "length"  # nosec B101
    assert map_finish_reason(table, "mystery") == "stop"  # nosec B101
    assert map_finish_reason(table, None) == "stop"  # nosec B101


def test_request_stop_sequences_and_bare_schema():
    assert CompletionRequest(model="m", messages=[], stop="END").stop_sequences() == ["END"]  # nosec B101
    assert CompletionRequest(model="m", messages=[]).stop_sequences() is None  # nosec B101
    wrapped = ResponseFormat(type="json_schema", json_schema={"name": "out", "schema": {"type": "object"}})
    assert wrapped.bare_schema() == {"type": "object"}  # nosec B101
    bare = ResponseFormat(type="json_schema", json_schema={"type": "array"})
    assert bare.bare_schema() == {"type": "array"}  # nosec B101
    assert ResponseFormat(type="json_object").bare_schema() is None  # nosec B101


def test_model_info_to_dict():
    info = ModelInfo(id="m1", name="Model One", provider="mistral", context_length=32000)
    assert info.to_dict()["context_length"] == 32000 and info.to_dict()["capabilities"] == {}  # nosec B101


@pytest.mark.parametrize(
    "text, expected",
    [('{"a": 1}', {"a": 1}), ("", {}), ("   ", {}), ("{not json", {}), ("[1, 2]", {}), (None, {})],
)
def test_parse_arguments_never_raises(text, expected):
    assert parse_arguments(text) == expected  # nosec B101


def test_coerce_and_dump_arguments():
    assert coerce_arguments({"k": "v"}) == {"k": "v"}  # nosec B101
    assert coerce_arguments('{"k": "v"}') == {"k": "v"}  # nosec B101
    assert coerce_arguments([("k", "v")]) == {"k": "v"}  # nosec B101
    assert coerce_arguments(42) == {}  # nosec B101
    assert dump_arguments({"city": "Zürich"}) == '{"city": "Zürich"}'  # nosec B101
    assert dump_arguments({}) == "{}"  # nosec B101


def test_field_access_on_dicts_and_objects():
    obj = SimpleNamespace(usage=SimpleNamespace(prompt_tokens=3), content=None)
    assert get_field({"a": None}, "a", "d") == "d"  # nosec B101
    assert get_field(obj, "content", "") == ""  # nosec B101
    assert get_path(obj, "usage", "prompt_tokens") == 3  # nosec B101
    assert get_path({"usage": {}}, "usage", "prompt_tokens", default=0) == 0  # nosec B101


def test_new_id_shape():
    first, second = new_id("msg"), new_id("msg")
    assert first.startswith("msg_") and len(first) == len("msg_") + 32  # nosec B101
    assert first != second  # nosec B101

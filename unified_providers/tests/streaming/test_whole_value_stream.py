from __future__ import annotations

from types import SimpleNamespace

import pytest

from unified_providers.base.streaming import reconstruct_whole_value_stream
from unified_providers.gemini.normalizers import GEMINI_FINISH_REASONS, parse_gemini_usage

from ..helpers import async_iter, collect


def _run(events):
    return collect(
        reconstruct_whole_value_stream(
            async_iter(events),
            provider="gemini",
            finish_reasons=GEMINI_FINISH_REASONS,
            usage_parser=parse_gemini_usage,
        )
    )


def _candidate(*parts, finish=None):
    return {"content": {"role": "model", "parts": list(parts)}, "finish_reason": finish}


@pytest.mark.asyncio
async def test_text_then_function_call_on_final_event():
    events = [
        {"candidates": [_candidate({"text": "Looking "})]},
        {
            "candidates": [_candidate({"function_call": {"name": "get_weather", "args": {"city": "Paris"}}}, finish="STOP")],
            "usage_metadata": {"prompt_token_count": 9, "candidates_token_count": 3},
        },
    ]
    chunks = await _run(events)
    assert [c.finished for c in chunks] == [False, True]  # nosec B101
    assert chunks[0].delta == "Looking "  # nosec B101
    terminal = chunks[1]
    (call,) = terminal.tool_calls
    assert call.name == "get_weather" and call.arguments == {"city": "Paris"}  # nosec B101
    assert terminal.finish_reason == "stop"  # nosec B101
    assert terminal.usage.total_tokens == 12  # nosec B101
    assert chunks[0].id == terminal.id  # nosec B101


@pytest.mark.asyncio
async def test_sdk_enum_finish_reason_and_thought_parts_skipped():
    enum_reason = SimpleNamespace(name="MAX_TOKENS")
    event = SimpleNamespace(
        candidates=[
            SimpleNamespace(
                content=SimpleNamespace(parts=[SimpleNamespace(text="internal", thought=True), SimpleNamespace(text="visible")]),
                finish_reason=enum_reason,
            )
        ],
        usage_metadata=None,
    )
    (terminal,) = await _run([event])
    assert terminal.delta == "visible"  # nosec B101
    assert terminal.finish_reason == "length"  # nosec B101


@pytest.mark.asyncio
async def test_unspecified_finish_reason_is_not_terminal():
    events = [
        {"candidates": [_candidate({"text": "a"}, finish="FINISH_REASON_UNSPECIFIED")]},
        {"candidates": [_candidate({"text": "b"}, finish="STOP")]},
    ]
    chunks = await _run(events)
    assert [(c.delta, c.finished) for c in chunks] == [("a", False), ("b", True)]  # nosec B101


@pytest.mark.asyncio
async def test_blocked_prompt_yields_content_filter_terminal():
    events = [{"candidates": [], "prompt_feedback": {"block_reason": "SAFETY"}}]
    (terminal,) = await _run(events)
    assert terminal.finished and terminal.finish_reason == "content_filter"  # nosec B101

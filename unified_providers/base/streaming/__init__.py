"""Streaming package for the provider layer.

Exposes the reconstruction engines, the stream driver, metrics and wire
decoders under a single namespace.
"""

from .state import StreamState, ToolCallAccumulator
from .index_stream import reconstruct_index_stream
from .block_stream import reconstruct_block_stream
from .event_stream import reconstruct_event_stream
from .whole_value_stream import reconstruct_whole_value_stream
from .finalize import collect_stream, finalize_partial_tool_calls
from .metrics import StreamMetrics
from .driver import drive_stream
from .sse import iter_ndjson, iter_sse_json, parse_sse_line

__all__ = [
    "StreamState",
    "ToolCallAccumulator",
    "reconstruct_index_stream",
    "reconstruct_block_stream",
    "reconstruct_event_stream",
    "reconstruct_whole_value_stream",
    "finalize_partial_tool_calls",
    "collect_stream",
    "StreamMetrics",
    "drive_stream",
    "iter_sse_json",
    "iter_ndjson",
    "parse_sse_line",
]

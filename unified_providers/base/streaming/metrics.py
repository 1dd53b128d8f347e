"""Streaming metrics data structures.

Isolated within the streaming package to keep the stream driver small.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional

from ..models import CompletionChunk, TokenUsage


@dataclass
class StreamMetrics:
    """Collected metrics for a single streaming call.

    Attributes:
        emitted: Number of chunks handed to the consumer.
        time_to_first_token_ms: Delay until the first chunk carrying text or
            tool-call data, relative to ``started_at``.
        total_duration_ms: Wall time of the whole stream; set on finalize.
        usage: Usage reported on the terminal chunk, if any.
        finish_reason: Finish reason of the terminal chunk.
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    usage: Optional[TokenUsage] = None
    finish_reason: Optional[str] = None
    started_at: float = field(default_factory=time.perf_counter)

    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started_at) * 1000.0

    def record(self, chunk: CompletionChunk) -> None:
        """Fold one emitted chunk into the metrics."""
        self.emitted += 1
        has_payload = bool(chunk.delta or chunk.tool_calls or chunk.tool_call_deltas)
        if has_payload and self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = self._elapsed_ms()
        if chunk.finished:
            self.usage = chunk.usage
            self.finish_reason = chunk.finish_reason

    def close(self) -> None:
        self.total_duration_ms = self._elapsed_ms()


__all__ = ["StreamMetrics"]

"""Stream driver shared by all adapters.

``drive_stream`` owns the lifecycle around a reconstruction engine:

1. open the vendor transport (an async context manager yielding the native
   event iterator),
2. run the engine over it, relaying unified chunks in transport order,
3. record metrics and emit normalized ``stream.start`` / ``stream.end`` /
   ``stream.error`` / ``stream.cancelled`` events,
4. convert any failure into a ``ProviderError``.

When the consumer stops early (``aclose()`` or ``contextlib.aclosing``), the
engine generator and the transport context are both closed on the way out;
nothing is raised to the consumer.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing
from typing import Any, AsyncContextManager, AsyncIterable, AsyncIterator, Callable

from ..errors import wrap_exception
from ..logging import LogContext, normalized_log_event
from ..models import CompletionChunk
from .metrics import StreamMetrics


StreamOpener = Callable[[], AsyncContextManager[AsyncIterable[Any]]]
StreamEngine = Callable[[AsyncIterable[Any]], AsyncIterator[CompletionChunk]]


def _finalize(logger: logging.Logger, event: str, ctx: LogContext, metrics: StreamMetrics, **extra: Any) -> None:
    metrics.close()
    normalized_log_event(
        logger,
        event,
        ctx,
        phase="finalize",
        attempt=None,
        emitted=metrics.emitted > 0,
        tokens=metrics.usage,
        emitted_count=metrics.emitted,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        finish_reason=metrics.finish_reason,
        **extra,
    )


async def drive_stream(
    open_stream: StreamOpener,
    engine: StreamEngine,
    *,
    provider: str,
    logger: logging.Logger,
    ctx: LogContext,
    operation: str = "streaming completion",
) -> AsyncIterator[CompletionChunk]:
    """Run ``engine`` over the transport produced by ``open_stream``.

    Parameters:
        open_stream: Zero-argument callable returning an async context manager
            whose value is the vendor's native async event iterator. Exiting
            the context must release the connection.
        engine: Reconstruction engine bound to the vendor's tables (usually a
            ``functools.partial`` of one of the ``reconstruct_*`` functions).
        provider: Provider key for errors and logs.
        logger: Adapter logger.
        ctx: Log context for this call.
        operation: Operation label used in wrapped error messages.

    Raises:
        ProviderError: For any transport, vendor or engine failure.
    """
    metrics = StreamMetrics()
    normalized_log_event(logger, "stream.start", ctx, phase="start", attempt=None, emitted=False, tokens=None)
    try:
        async with open_stream() as events:
            async with aclosing(engine(events)) as chunks:
                async for chunk in chunks:
                    metrics.record(chunk)
                    yield chunk
    except (GeneratorExit, asyncio.CancelledError):
        _finalize(logger, "stream.cancelled", ctx, metrics, level=logging.INFO)
        raise
    except Exception as exc:
        error = wrap_exception(exc, provider=provider, operation=operation)
        _finalize(logger, "stream.error", ctx, metrics, error_code=error.code, error=error.message[:260])
        if error is exc:
            raise
        raise error from exc
    _finalize(logger, "stream.end", ctx, metrics)


__all__ = ["drive_stream", "StreamOpener", "StreamEngine"]

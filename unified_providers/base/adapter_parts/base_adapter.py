"""BaseProviderAdapter shared by every vendor adapter.

Purpose:
- Own the call lifecycle that is identical across vendors: model
  defaulting, local validation before I/O, structured ``chat.*`` and
  ``stream.*`` events, and conversion of every failure into a
  ``ProviderError``.
- Leave vendor specifics to a handful of hooks.

Subclass hooks:
- ``_build_payload(request, stream)``: converter call; raises validation
  errors before any network activity.
- ``_send(payload)``: one non-streaming vendor call.
- ``_normalize(raw, request)``: vendor response to ``CompletionResponse``.
- ``_open_stream(payload)``: async context manager yielding native events.
- ``_stream_engine()``: reconstruction engine bound to vendor tables.
- ``_fetch_models()``: vendor model listing.

The base performs no retries; ``ProviderError.is_retryable`` tells callers
whether retrying makes sense.
"""

from __future__ import annotations

from contextlib import aclosing
from dataclasses import replace
from typing import Any, AsyncContextManager, AsyncIterable, AsyncIterator, Awaitable, Callable, Dict, List, Optional, TypeVar

from ..errors import wrap_exception
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import CompletionChunk, CompletionRequest, CompletionResponse, ModelInfo
from ..streaming import drive_stream
from ..streaming.driver import StreamEngine
from .adapter_init import _AdapterInit

T = TypeVar("T")


class BaseProviderAdapter:
    """Reusable lifecycle for provider adapters.

    Subclasses set :attr:`name` and implement the hooks listed in the module
    docstring. Optional capabilities (embeddings, images, audio) are plain
    methods on the subclasses that route their vendor call through
    :meth:`_guarded`.
    """

    name: str = ""

    def __init__(self, init: _AdapterInit) -> None:
        self._model = init.default_model
        self._api_key = init.api_key
        self._base_url = init.base_url
        self._headers = dict(init.headers or {})
        self._timeout_seconds = init.timeout_seconds
        self._logger = get_logger(init.logger_name)

    # ----- Abstract surface -----
    def _build_payload(self, request: CompletionRequest, *, stream: bool) -> Dict[str, Any]:  # pragma: no cover - abstract
        raise NotImplementedError

    async def _send(self, payload: Dict[str, Any]) -> Any:  # pragma: no cover - abstract
        raise NotImplementedError

    def _normalize(self, raw: Any, request: CompletionRequest) -> CompletionResponse:  # pragma: no cover - abstract
        raise NotImplementedError

    def _open_stream(self, payload: Dict[str, Any]) -> AsyncContextManager[AsyncIterable[Any]]:  # pragma: no cover - abstract
        raise NotImplementedError

    def _stream_engine(self) -> StreamEngine:  # pragma: no cover - abstract
        raise NotImplementedError

    async def _fetch_models(self) -> List[ModelInfo]:  # pragma: no cover - abstract
        raise NotImplementedError

    # ----- Basic info -----
    @property
    def provider_name(self) -> str:
        return self.name

    def default_model(self) -> Optional[str]:
        """Return the model used when a request leaves ``model`` empty."""
        return self._model

    def _resolve(self, request: CompletionRequest) -> CompletionRequest:
        if request.model or not self._model:
            return request
        return replace(request, model=self._model)

    def _ctx(self, model: Optional[str], operation: str) -> LogContext:
        return LogContext(provider=self.name, model=model, operation=operation)

    # ----- Error boundary -----
    async def _guarded(self, operation: str, ctx: LogContext, call: Callable[[], Awaitable[T]]) -> T:
        """Await ``call`` converting any failure into a logged ``ProviderError``."""
        try:
            return await call()
        except Exception as exc:
            error = wrap_exception(exc, provider=self.name, operation=operation)
            normalized_log_event(
                self._logger,
                f"{ctx.operation or 'call'}.error",
                ctx,
                phase="finalize",
                attempt=None,
                error_code=error.code,
                emitted=False,
                tokens=None,
                http_status=error.http_status,
                retryable=error.is_retryable(),
            )
            if error is exc:
                raise
            raise error from exc

    # ----- Chat -----
    async def generate_completion(self, request: CompletionRequest) -> CompletionResponse:
        """Execute one non-streaming completion.

        Validation (unsupported content, turn structure, unresolved tool
        names) raises before any network call.
        """
        request = self._resolve(request)
        payload = self._build_payload(request, stream=False)
        ctx = self._ctx(request.model, "chat")
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            attempt=None,
            emitted=False,
            tokens=None,
            messages=len(request.messages),
            tools=len(request.tools),
        )
        async def send_and_normalize() -> CompletionResponse:
            return self._normalize(await self._send(payload), request)

        response = await self._guarded("completion generation", ctx, send_and_normalize)
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx.with_response(response.id),
            phase="finalize",
            attempt=None,
            emitted=bool(response.content or response.tool_calls),
            tokens=response.usage,
            finish_reason=response.finish_reason,
        )
        return response

    async def stream_completion(self, request: CompletionRequest) -> AsyncIterator[CompletionChunk]:
        """Stream a completion as unified chunks.

        Validation errors raise on the first ``__anext__``, before the
        transport is opened.
        """
        request = self._resolve(request)
        payload = self._build_payload(request, stream=True)
        chunks = drive_stream(
            lambda: self._open_stream(payload),
            self._stream_engine(),
            provider=self.name,
            logger=self._logger,
            ctx=self._ctx(request.model, "stream"),
        )
        async with aclosing(chunks) as stream:
            async for chunk in stream:
                yield chunk

    # ----- Models -----
    async def list_models(self) -> List[ModelInfo]:
        return await self._guarded("model listing", self._ctx(None, "models"), self._fetch_models)

    async def get_model(self, model_id: str) -> Optional[ModelInfo]:
        """Return the listing entry whose id matches ``model_id``, else ``None``."""
        for info in await self.list_models():
            if info.id == model_id:
                return info
        return None


__all__ = ["BaseProviderAdapter"]

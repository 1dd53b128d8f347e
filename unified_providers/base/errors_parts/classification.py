"""
Error classification helpers mapping exceptions to normalized error values.

Implements HTTP status extraction, vendor error-type extraction from response
bodies, transport failure detection, and message-based heuristics as a final
fallback. ``wrap_exception`` is the single entry point adapters use at their
boundary so no vendor exception type escapes.
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a provider exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def _extract_body(exc: BaseException) -> Any:
    """Return the decoded vendor error body if the exception carries one."""
    body = getattr(exc, "body", None)
    if body is not None:
        return body
    resp = getattr(exc, "response", None)
    if isinstance(resp, httpx.Response):
        try:
            return resp.json()
        except (ValueError, httpx.ResponseNotRead):
            return None
    return None


def vendor_error_code(body: Any) -> Optional[str]:
    """Pull the vendor's error type out of a decoded error body.

    Handles the common shapes ``{"error": {"type": ...}}``,
    ``{"error": {"code": ...}}``, ``{"error": "..."}`` and a bare
    ``{"type": ...}`` (Anthropic wraps errors as ``{"type": "error", ...}``
    so the literal ``"error"`` is skipped).
    """
    if isinstance(body, (bytes, str)):
        try:
            body = json.loads(body)
        except ValueError:
            return None
    if not isinstance(body, dict):
        return None
    err = body.get("error", body)
    if isinstance(err, str):
        return err or None
    if isinstance(err, dict):
        for key in ("type", "code", "status"):
            val = err.get(key)
            if isinstance(val, str) and val and val != "error":
                return val
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT_ERROR,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.UNAVAILABLE,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT_ERROR,
}


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for exceptions without status or type."""
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    pattern_groups = (
        (ErrorCode.TIMEOUT_ERROR, ("timeout", "timed out")),
        (ErrorCode.NETWORK_ERROR, ("connection refused", "connection reset", "network")),
        (ErrorCode.AUTH, ("unauthorized", "forbidden", "api key")),
        (ErrorCode.UNSUPPORTED, ("unsupported", "not supported")),
        (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
        (ErrorCode.VALIDATION, ("validation", "invalid", "malformed")),
        (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
    )
    for code, patterns in pattern_groups:
        if any(p in msg for p in patterns):
            return code
    return None


def _is_timeout(exc: BaseException) -> bool:
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return True
    # Vendor SDKs (openai, anthropic) raise their own APITimeoutError types.
    return "Timeout" in type(exc).__name__


def _is_network(exc: BaseException) -> bool:
    if isinstance(exc, (httpx.TransportError, ConnectionError)):
        return True
    return "Connection" in type(exc).__name__


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough (vendor codes map to ``UNKNOWN``).
        2. Timeout exceptions.
        3. Transport/connection exceptions.
        4. HTTP status mapping.
        5. Message substring heuristics.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        try:
            return ErrorCode(exc.code)
        except ValueError:
            return ErrorCode.UNKNOWN
    if _is_timeout(exc):
        return ErrorCode.TIMEOUT_ERROR
    if _is_network(exc):
        return ErrorCode.NETWORK_ERROR
    status = _extract_status(exc)
    if status is not None:
        if status in _HTTP_STATUS_MAP:
            return _HTTP_STATUS_MAP[status]
        return ErrorCode.SERVER_ERROR if status >= 500 else ErrorCode.UNKNOWN
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


def wrap_exception(exc: BaseException, *, provider: str, operation: str) -> ProviderError:
    """Convert any exception into a :class:`ProviderError`.

    Parameters:
        exc: The exception caught at an adapter or engine boundary.
        provider: Provider key to attach.
        operation: Short description used in the message (e.g.
            ``"completion generation"``).

    Returns:
        A ``ProviderError``. Existing provider errors are returned unchanged
        (with ``provider`` filled in when it was missing).
    """
    if isinstance(exc, ProviderError):
        if exc.provider is None:
            exc.provider = provider
        return exc
    if isinstance(exc.__cause__, ProviderError):
        # SDK transports re-raise failures of the httpx auth hook as connection errors
        return wrap_exception(exc.__cause__, provider=provider, operation=operation)
    status = _extract_status(exc)
    context: Dict[str, Any] = {"operation": operation, "exception_type": type(exc).__name__}
    vendor_code: Optional[str] = None
    if status is not None:
        body = _extract_body(exc)
        vendor_code = vendor_error_code(body)
        if body is not None:
            context["body"] = body
    code = vendor_code or classify_exception(exc).value
    return ProviderError(
        code=code,
        message=f"{provider} {operation} failed: {exc}",
        provider=provider,
        http_status=status,
        cause=exc,
        context=context,
    )


def unsupported_content(provider: str, part_type: str, detail: str = "") -> ProviderError:
    """Build the validation error raised for a content part with no wire form."""
    suffix = f" ({detail})" if detail else ""
    return ProviderError(
        code=ErrorCode.UNSUPPORTED_CONTENT,
        message=f"{provider} does not support content type: {part_type}{suffix}",
        provider=provider,
        context={"part_type": part_type},
    )


def validation_error(provider: str, message: str, **context: Any) -> ProviderError:
    """Build a local validation error (raised before any network call)."""
    return ProviderError(
        code=ErrorCode.VALIDATION,
        message=message,
        provider=provider,
        context=dict(context),
    )


__all__ = [
    "classify_exception",
    "wrap_exception",
    "vendor_error_code",
    "unsupported_content",
    "validation_error",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]

"""Structured JSON logging for adapters and the OAuth engine.

Every logger handed out by :func:`get_logger` hangs off the ``providers``
logger, which owns the only console handler and takes its level from
``PROVIDERS_LOG_LEVEL``. Events are one JSON object per line:
:func:`log_event` for free-form events, :func:`normalized_log_event` for the
request/stream lifecycle (``structured``, ``phase``, ``attempt``,
``error_code``, ``emitted``, ``tokens``). Credential-bearing keys are masked
before anything is formatted.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext


_BASE_LOGGER_NAME = "providers"
_CONSOLE_HANDLER_ATTR = "_providers_console_handler"
_FILE_HANDLER_ATTR = "_providers_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Keys whose values are never written to logs.
_SECRET_KEYS = frozenset(
    {
        "access_token",
        "refresh_token",
        "api_key",
        "authorization",
        "code_verifier",
        "client_secret",
        "device_code",
    }
)


def _parse_level(value: Optional[str], default: int = logging.INFO) -> int:
    """``"debug"`` -> ``logging.DEBUG``; unknown or empty names give ``default``."""
    if not value:
        return default
    name = value.strip().upper()
    if name == "WARN":
        name = "WARNING"
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else default


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared ``providers`` logger."""
    logger = logging.getLogger(_BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv("PROVIDERS_LOG_LEVEL"), default=level)
    logger.setLevel(desired_level)
    console = next((h for h in logger.handlers if getattr(h, _CONSOLE_HANDLER_ATTR, False)), None)
    stream_obj = getattr(console, "stream", None)
    if console is not None and (stream_obj is None or getattr(stream_obj, "closed", False)):
        # pytest capture swaps and closes stderr between tests
        logger.removeHandler(console)
        with contextlib.suppress(Exception):
            console.close()
        console = None
    if console is None:
        console = logging.StreamHandler(sys.stderr)
        setattr(console, _CONSOLE_HANDLER_ATTR, True)
        logger.addHandler(console)
    console.setLevel(desired_level)
    if json_mode != isinstance(console.formatter, JsonFormatter):
        console.setFormatter(_make_formatter(json_mode))
    logger.propagate = False
    return logger


def get_logger(name: str = _BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a logger under the shared ``providers`` hierarchy.

    Names are conventionally ``"providers.<vendor>"`` or ``"providers.oauth"``.
    Child loggers carry no handlers of their own and propagate to the base.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == _BASE_LOGGER_NAME:
        return base_logger
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared ``providers`` logger at runtime.

    ``level`` (name or number) applies to the logger and all its handlers;
    ``None`` keeps the current level. ``file_path`` attaches a rotating file
    handler (10MB x 5) and ``None`` detaches one previously attached here.
    """
    logger = get_logger(_BASE_LOGGER_NAME, json_mode=json_mode)
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)
        for h in logger.handlers:
            h.setLevel(logger.level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is None or getattr(h, "baseFilename", None) != abs_path:
            logger.removeHandler(h)
            with contextlib.suppress(Exception):
                h.close()
    if abs_path is None:
        return logger

    existing = next(
        (h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)),
        None,
    )
    if existing is None:
        os.makedirs(os.path.dirname(abs_path) or ".", exist_ok=True)
        existing = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(existing, _FILE_HANDLER_ATTR, True)
        logger.addHandler(existing)
    existing.setFormatter(_make_formatter(json_mode))
    existing.setLevel(logger.level)
    return logger


def _mask(fields: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: ("***" if k.lower() in _SECRET_KEYS and v is not None else v) for k, v in fields.items()}


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Write ``event`` plus ``ctx`` and ``fields`` as one JSON line.

    ``None`` fields are dropped unless ``keep_none``. Secret keys
    (tokens, api keys, verifiers) are replaced with ``***``.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(_mask(fields))
    else:
        payload.update(_mask({k: v for k, v in fields.items() if v is not None}))
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Optional[Dict[str, Any]]:
    """``TokenUsage`` or a mapping as a plain dict; anything else is repr'd."""
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens)
    if hasattr(tokens, "to_dict"):
        return tokens.to_dict()
    return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int | None = None,
    **extra_fields: Any,
) -> None:
    """Emit a normalized structured log event with required keys.

    Required keys are always present (``None`` preserved) except
    ``error_code``, which is omitted when ``None``. Events carrying an error
    code default to ``WARNING`` level. Extra fields never overwrite the
    normalized values.
    """
    base_fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    if level is None:
        level = logging.WARNING if error_code is not None else logging.INFO
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]

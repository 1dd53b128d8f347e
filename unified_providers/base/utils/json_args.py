"""Tool-call argument (de)serialization helpers."""
from __future__ import annotations

import json
from typing import Any, Dict, Optional


def parse_arguments(text: Optional[str]) -> Dict[str, Any]:
    """Parse tool-call argument text into a JSON object.

    Empty text, malformed JSON, and JSON that is not an object all yield
    ``{}``; a single malformed call must not abort the surrounding
    conversion or stream.
    """
    if not text or not text.strip():
        return {}
    try:
        value = json.loads(text)
    except ValueError:
        return {}
    return value if isinstance(value, dict) else {}


def coerce_arguments(value: Any) -> Dict[str, Any]:
    """Accept either a JSON string or an already-decoded mapping."""
    if isinstance(value, str):
        return parse_arguments(value)
    if isinstance(value, dict):
        return dict(value)
    if value is None:
        return {}
    try:
        return dict(value)
    except (TypeError, ValueError):
        return {}


def dump_arguments(arguments: Dict[str, Any]) -> str:
    return json.dumps(arguments or {}, ensure_ascii=False)


__all__ = ["parse_arguments", "coerce_arguments", "dump_arguments"]

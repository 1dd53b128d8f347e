"""Per-call context attached to every provider log event."""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LogContext:
    """Who/what a log event is about.

    Adapters build one per call (provider, model, operation) and derive a
    copy carrying the response id once the vendor returns one. The OAuth
    engine leaves ``model`` unset. ``extra`` holds call-specific keys and
    is flattened into the event; ``None`` values never reach the log line.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    operation: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def with_response(self, response_id: Optional[str]) -> "LogContext":
        return replace(self, response_id=response_id, extra=dict(self.extra))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is not None:
                out[f.name] = value
        for key, value in self.extra.items():
            if value is not None:
                out[key] = value
        return out


__all__ = ["LogContext"]

"""Uniform access to vendor payloads.

Vendor SDKs hand back typed objects while raw-HTTP adapters decode JSON into
dicts; normalizers and stream engines read both through :func:`get_field`.
"""
from __future__ import annotations

from typing import Any, List, Mapping


def get_field(obj: Any, name: str, default: Any = None) -> Any:
    """Return ``obj[name]`` for mappings or ``obj.name`` otherwise."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        value = obj.get(name, default)
    else:
        value = getattr(obj, name, default)
    return default if value is None else value


def get_path(obj: Any, *names: str, default: Any = None) -> Any:
    """Follow ``names`` through nested fields, returning ``default`` on a gap."""
    current = obj
    for name in names:
        current = get_field(current, name)
        if current is None:
            return default
    return current


def get_list(obj: Any, name: str) -> List[Any]:
    value = get_field(obj, name)
    return list(value) if value else []


__all__ = ["get_field", "get_path", "get_list"]

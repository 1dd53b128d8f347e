"""Identifier synthesis for vendors that omit response or tool-call ids."""
from __future__ import annotations

import uuid


def new_id(prefix: str) -> str:
    """Return ``<prefix>_<32 hex chars>`` from a random UUID."""
    return f"{prefix}_{uuid.uuid4().hex}"


__all__ = ["new_id"]

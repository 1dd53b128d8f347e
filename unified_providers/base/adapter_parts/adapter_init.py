"""Initialization dataclass for provider adapters.

Pure data container bundling the constructor values shared by every
``BaseProviderAdapter`` subclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class _AdapterInit:
    """Initialization bundle for ``BaseProviderAdapter``.

    Attributes:
        default_model: Model used when a request leaves ``model`` empty.
        logger_name: Structured logger name (e.g. ``providers.cohere``).
        api_key: Credential for key-authenticated vendors.
        base_url: API base URL.
        headers: Static headers sent with every request.
        timeout_seconds: Transport timeout for adapter-owned clients.
    """

    default_model: Optional[str]
    logger_name: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    timeout_seconds: Optional[float] = None


__all__ = ["_AdapterInit"]

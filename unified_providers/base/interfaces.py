"""
Provider-agnostic interfaces (Protocols) for the providers layer.

This module re-exports Protocols split into single-class modules under
``unified_providers.base.interfaces_parts`` to keep imports stable for
upstream code.
"""

from __future__ import annotations

from .interfaces_parts import (
    ProviderAdapter,
    SupportsAudio,
    SupportsEmbeddings,
    SupportsImages,
    TokenStorage,
)

__all__ = [
    "ProviderAdapter",
    "SupportsEmbeddings",
    "SupportsImages",
    "SupportsAudio",
    "TokenStorage",
]

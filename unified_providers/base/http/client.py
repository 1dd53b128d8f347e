"""Shared async HTTP client pool for providers.

Purpose:
    Provide a pool of reusable ``httpx.AsyncClient`` instances so adapters
    speaking raw HTTP (OpenRouter, Cohere, Mistral, the OAuth engine) share
    connections instead of allocating a client per call.

Timeout strategy:
    The client's timeout comes from :func:`unified_providers.config.get_http_timeout`
    at creation time. The pool does not retry.

Lifecycle & cleanup:
    Clients are cached by ``(base_url, purpose)``. Async clients cannot be
    closed from an ``atexit`` hook, so applications and tests call
    :func:`aclose_all_clients` from their own event loop on shutdown.
"""

from __future__ import annotations

import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

from ...config import get_http_timeout

# Internal cache keyed by (base_url, purpose)
_CLIENTS: Dict[Tuple[Optional[str], str], httpx.AsyncClient] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the given base URL and purpose.

    Parameters:
        base_url: Optional API base URL set on the client so callers can use
            relative paths. ``None`` groups clients under a shared key.
        purpose: A short string discriminating separate pools (e.g.
            ``"cohere.chat"``, ``"oauth"``). Keep stable to maximize reuse.

    Returns:
        A reusable ``httpx.AsyncClient``. A cached client that was closed is
        transparently replaced.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = get_timeout()
        client = httpx.AsyncClient(base_url=base_url, timeout=timeout) if base_url else httpx.AsyncClient(timeout=timeout)
        _CLIENTS[key] = client
        return client


def get_timeout() -> httpx.Timeout:
    """Return the transport timeout applied to pooled and adapter-owned clients."""
    return httpx.Timeout(get_http_timeout())


async def aclose_all_clients() -> None:
    """Close and clear all pooled HTTP clients.

    Close failures during shutdown are not actionable and are suppressed.
    """
    with _LOCK:
        clients = list(_CLIENTS.values())
        _CLIENTS.clear()
    for c in clients:
        with contextlib.suppress(Exception):
            await c.aclose()


__all__ = ["get_httpx_client", "get_timeout", "aclose_all_clients"]

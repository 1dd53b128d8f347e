"""HTTP utilities package for providers.

Exposes pooled ``httpx.AsyncClient`` instances.
"""

from .client import aclose_all_clients, get_httpx_client, get_timeout

__all__ = ["get_httpx_client", "get_timeout", "aclose_all_clients"]

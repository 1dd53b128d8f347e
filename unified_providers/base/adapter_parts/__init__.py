"""Shared adapter lifecycle split into single-class modules."""

from .adapter_init import _AdapterInit
from .base_adapter import BaseProviderAdapter
from .http_transport import HttpTransportMixin, raise_for_status
from .settings import resolve_settings

__all__ = [
    "BaseProviderAdapter",
    "HttpTransportMixin",
    "_AdapterInit",
    "raise_for_status",
    "resolve_settings",
]

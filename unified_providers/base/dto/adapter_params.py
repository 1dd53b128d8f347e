"""Construction parameters shared by every adapter.

``AdapterParams`` is what callers hand to the factory. Fields common to all
vendors are typed; vendor-only arguments (OpenRouter ``site_url`` and
``app_name``, an ``oauth`` engine for Anthropic or GitHub Copilot) ride in
``extra``. Validation is Pydantic v2; there is no I/O here.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class AdapterParams(BaseModel):
    """Common provider adapter initialization parameters.

    Attributes
    ----------
    provider:
        Canonical provider key. Optional; the factory takes the provider
        separately and drops this field before construction.
    model:
        Default model for requests that leave ``model`` empty.
    api_key:
        API key for key-authenticated vendors. When omitted, adapters resolve
        it through :func:`unified_providers.config.get_provider_config`.
    base_url:
        Optional API base URL override (proxies, gateways).
    timeout_seconds:
        Transport timeout for the adapter's own client.
    headers:
        Static HTTP headers added to every request.
    extra:
        Vendor-specific constructor arguments, merged into the keyword
        arguments passed to the adapter.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    provider: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    headers: Mapping[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)

    def constructor_kwargs(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Adapter keyword arguments with ``overrides`` layered on top.

        Unset fields are left out so adapter defaults and config still
        apply. ``extra`` entries become top-level keywords. Headers from both
        sides are combined; on a clash the override wins.
        """
        overrides = dict(overrides or {})
        out: Dict[str, Any] = {}
        for key in ("model", "api_key", "base_url", "timeout_seconds"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        for key, value in self.extra.items():
            out.setdefault(key, value)
        headers = {**self.headers, **(overrides.pop("headers", None) or {})}
        if headers:
            out["headers"] = headers
        out.update(overrides)
        return out


__all__ = ["AdapterParams"]

"""Resolve adapter constructor arguments against provider configuration."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from ...config import get_provider_config
from .adapter_init import _AdapterInit


def resolve_settings(
    provider: str,
    *,
    model: Optional[str] = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
    timeout_seconds: Optional[float] = None,
) -> Tuple[_AdapterInit, Dict[str, Any]]:
    """Merge explicit arguments over :func:`get_provider_config`.

    Returns the init bundle and the full merged config so adapters can read
    vendor-specific keys (``app_name``, ``site_url``, ...).
    """
    cfg = get_provider_config(
        provider,
        overrides={"model": model, "api_key": api_key, "base_url": base_url},
    )
    init = _AdapterInit(
        default_model=cfg.get("model"),
        logger_name=f"providers.{provider.replace('-', '_')}",
        api_key=cfg.get("api_key"),
        base_url=cfg.get("base_url"),
        headers=dict(headers or {}),
        timeout_seconds=timeout_seconds,
    )
    return init, cfg


__all__ = ["resolve_settings"]

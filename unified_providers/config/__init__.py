"""Unified configuration layer for providers.

Merge order (later wins)
------------------------
1. Built-in defaults (:data:`DEFAULTS`, built from ``config.defaults``)
2. Optional external config file (JSON or YAML) pointed to by
   ``PROVIDERS_CONFIG_FILE``
3. Environment variables ``<PREFIX>_MODEL``, ``<PREFIX>_API_KEY``,
   ``<PREFIX>_BASE_URL`` where ``PREFIX`` is the upper-cased provider key with
   dashes replaced (``github-copilot`` → ``GITHUB_COPILOT``)
4. Canonical/alias credential variables from :mod:`.env` when no key is set
5. In-code overrides passed to :func:`get_provider_config`

External Config File
--------------------
JSON is tried first, then YAML. Structure example::

    openai:
      model: gpt-4o-mini
    openrouter:
      base_url: https://openrouter.ai/api/v1
      app_name: my-app

Public API
----------
* get_provider_config(provider, overrides=None) -> dict
* get_model(provider) -> str | None
* get_http_timeout() -> float
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MODEL,
    COHERE_DEFAULT_BASE_URL,
    COHERE_DEFAULT_MODEL,
    GEMINI_DEFAULT_MODEL,
    GITHUB_COPILOT_DEFAULT_BASE_URL,
    GITHUB_COPILOT_DEFAULT_MODEL,
    MISTRAL_DEFAULT_BASE_URL,
    MISTRAL_DEFAULT_MODEL,
    OPENAI_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_APP_NAME,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
    PROVIDERS_HTTP_TIMEOUT_DEFAULT_SECONDS,
)
from .env import env_prefix, is_placeholder, resolve_provider_key


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL},
    "openrouter": {
        "model": OPENROUTER_DEFAULT_MODEL,
        "base_url": OPENROUTER_DEFAULT_BASE_URL,
        "app_name": OPENROUTER_DEFAULT_APP_NAME,
    },
    "github-copilot": {"model": GITHUB_COPILOT_DEFAULT_MODEL, "base_url": GITHUB_COPILOT_DEFAULT_BASE_URL},
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL, "base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "gemini": {"model": GEMINI_DEFAULT_MODEL},
    "cohere": {"model": COHERE_DEFAULT_MODEL, "base_url": COHERE_DEFAULT_BASE_URL},
    "mistral": {"model": MISTRAL_DEFAULT_MODEL, "base_url": MISTRAL_DEFAULT_BASE_URL},
}


ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Existing
    environment variables win unless they hold placeholder values.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        return
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                os.environ[k] = v


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    data: Any = {}
    if path and Path(path).is_file():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError:
                data = {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached external config file (used by tests)."""
    global _FILE_CACHE
    _FILE_CACHE = None


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = env_prefix(provider)
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None:
            out[field] = val
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars ->
    canonical key env vars (only if no key yet) -> overrides.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if not cfg.get("api_key"):
        key, _ = resolve_provider_key(name)
        if key:
            cfg["api_key"] = key

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


def get_http_timeout() -> float:
    """Return the pooled HTTP client timeout from ``PROVIDERS_HTTP_TIMEOUT``."""
    raw = os.getenv("PROVIDERS_HTTP_TIMEOUT")
    if raw:
        try:
            value = float(raw)
        except ValueError:
            value = 0.0
        if value > 0:
            return value
    return PROVIDERS_HTTP_TIMEOUT_DEFAULT_SECONDS


__all__ = [
    "get_provider_config",
    "get_model",
    "get_http_timeout",
    "reset_config_cache",
    "DEFAULTS",
]

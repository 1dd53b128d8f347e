"""Credential environment variables per provider.

``KEY_ENV_VARS`` lists, per provider, every variable that may hold its API
key with the preferred name first. GitHub Copilot is absent on purpose: it
authenticates through the OAuth engine only.

Nothing here raises; lookups for unknown providers come back empty.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

KEY_ENV_VARS: Dict[str, Tuple[str, ...]] = {
    "openai": ("OPENAI_API_KEY",),
    "openrouter": ("OPENROUTER_API_KEY",),
    "anthropic": ("ANTHROPIC_API_KEY",),
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "cohere": ("COHERE_API_KEY", "CO_API_KEY"),
    "mistral": ("MISTRAL_API_KEY",),
}

# canonical name only, for docs and diagnostics
ENV_MAP: Dict[str, str] = {provider: names[0] for provider, names in KEY_ENV_VARS.items()}

_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "example")


def env_prefix(provider: str) -> str:
    """``github-copilot`` -> ``GITHUB_COPILOT``."""
    return (provider or "").strip().upper().replace("-", "_")


def is_placeholder(val: Optional[str]) -> bool:
    """True for sample values copied from docs (``changeme``, ``test_...``)."""
    if val is None:
        return False
    lowered = str(val).strip().lower()
    if lowered.startswith("test_"):
        return True
    return any(marker in lowered for marker in _PLACEHOLDER_MARKERS)


def get_env_var_candidates(provider: str) -> Iterable[str]:
    return iter(KEY_ENV_VARS.get((provider or "").strip().lower(), ()))


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, variable)`` for the first usable candidate.

    Empty and placeholder values are skipped. ``(None, None)`` when no
    candidate holds a real key.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "KEY_ENV_VARS",
    "ENV_MAP",
    "env_prefix",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_provider_key",
]

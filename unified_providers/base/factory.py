"""Adapter construction by provider name.

Vendor modules are imported on first use, so a process that only talks to
Gemini never imports ``openai`` or ``anthropic``. Names are case-insensitive
and ``github_copilot`` is accepted for ``github-copilot``.

There is no fallback between providers: :meth:`ProviderFactory.create`
returns an adapter or raises :class:`UnknownProviderError`.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Optional, Tuple

from .dto.adapter_params import AdapterParams


class UnknownProviderError(Exception):
    """The provider is unregistered, failed to import, or rejected its arguments."""


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Shorthand for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


def normalize_provider_name(provider: str) -> str:
    return (provider or "").strip().lower().replace("_", "-")


class ProviderFactory:
    """Registry of ``name -> (module, adapter class)``."""

    _REGISTRY: Dict[str, Tuple[str, str]] = {
        "openai": ("unified_providers.openai.client", "OpenAIAdapter"),
        "openrouter": ("unified_providers.openrouter.client", "OpenRouterAdapter"),
        "github-copilot": ("unified_providers.github_copilot.client", "GitHubCopilotAdapter"),
        "anthropic": ("unified_providers.anthropic.client", "AnthropicAdapter"),
        "gemini": ("unified_providers.gemini.client", "GeminiAdapter"),
        "cohere": ("unified_providers.cohere.client", "CohereAdapter"),
        "mistral": ("unified_providers.mistral.client", "MistralAdapter"),
    }

    @classmethod
    def adapter_class(cls, provider: str) -> type:
        """Import and return the adapter class registered for ``provider``.

        Raises:
            UnknownProviderError: unregistered name, or the vendor module
                (usually its SDK) could not be imported.
        """
        entry = cls._REGISTRY.get(normalize_provider_name(provider))
        if entry is None:
            raise UnknownProviderError(f"Unknown provider '{provider}'")
        module_path, class_name = entry
        try:
            module = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - missing vendor SDK
            raise UnknownProviderError(f"Cannot load '{module_path}' for provider '{provider}': {exc}") from exc
        klass = getattr(module, class_name, None)
        if klass is None:  # pragma: no cover - registry typo
            raise UnknownProviderError(f"'{module_path}' has no adapter class '{class_name}'")
        return klass

    @classmethod
    def create(cls, provider: str, *, params: Optional[AdapterParams] = None, **kwargs: Any) -> Any:
        """Build an adapter.

        ``params`` supplies defaults; explicit ``kwargs`` win over it (see
        :meth:`AdapterParams.constructor_kwargs`).

        Raises:
            UnknownProviderError: see :meth:`adapter_class`; also raised when
                the constructor rejects the keyword arguments.
        """
        klass = cls.adapter_class(provider)
        ctor_kwargs = params.constructor_kwargs(kwargs) if params is not None else dict(kwargs)
        try:
            return klass(**ctor_kwargs)
        except TypeError as exc:
            raise UnknownProviderError(f"Invalid arguments for '{provider}' adapter: {exc}") from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Canonical names in registration order."""
        return tuple(cls._REGISTRY)


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider", "normalize_provider_name"]

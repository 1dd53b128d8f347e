from __future__ import annotations

import pytest

import unified_providers
from unified_providers.base.dto import AdapterParams
from unified_providers.base.factory import ProviderFactory, UnknownProviderError, create_provider
from unified_providers.base.interfaces import ProviderAdapter, SupportsAudio, SupportsEmbeddings, SupportsImages
from unified_providers.github_copilot import GitHubCopilotAdapter
from unified_providers.openai import OpenAIAdapter
from unified_providers.openrouter import OpenRouterAdapter


def test_factory_unknown_provider():
    with pytest.raises(UnknownProviderError):
        ProviderFactory.create("nope")


def test_factory_import_failure(monkeypatch):
    monkeypatch.setattr(ProviderFactory, "_REGISTRY", {"bogus": ("does.not.exist", "X")})
    with pytest.raises(UnknownProviderError):
        ProviderFactory.create("bogus")


def test_factory_rejects_unknown_constructor_arguments():
    with pytest.raises(UnknownProviderError) as info:
        ProviderFactory.create("openai", api_key="sk-test", colour="blue")
    assert "Invalid arguments" in str(info.value)  # nosec B101


def test_supported_lists_all_vendors():
    assert ProviderFactory.supported() == (  # nosec B101
        "openai",
        "openrouter",
        "github-copilot",
        "anthropic",
        "gemini",
        "cohere",
        "mistral",
    )


def test_create_normalizes_name_and_sets_model():
    adapter = unified_providers.create("OpenAI", model="gpt-4.1", api_key="sk-test")
    assert isinstance(adapter, OpenAIAdapter)  # nosec B101
    assert adapter.provider_name == "openai" and adapter.default_model() == "gpt-4.1"  # nosec B101


def test_underscore_alias_resolves_copilot():
    adapter = create_provider("github_copilot")
    assert isinstance(adapter, GitHubCopilotAdapter)  # nosec B101
    assert adapter.default_model() == "gpt-4o"  # nosec B101


def test_params_merge_headers_and_flatten_extra():
    params = AdapterParams(
        provider="openrouter",
        model="openai/gpt-4o-mini",
        api_key="or-key",
        headers={"X-Team": "core"},
        extra={"site_url": "https://app.example", "app_name": "from-params"},
    )
    adapter = ProviderFactory.create("openrouter", params=params, headers={"X-Trace": "1"}, app_name="explicit")

    assert isinstance(adapter, OpenRouterAdapter)  # nosec B101
    assert adapter.default_model() == "openai/gpt-4o-mini"  # nosec B101
    assert adapter._headers["X-Team"] == "core" and adapter._headers["X-Trace"] == "1"  # nosec B101
    assert adapter._headers["HTTP-Referer"] == "https://app.example"  # nosec B101
    assert adapter._headers["X-Title"] == "explicit"  # nosec B101


def test_constructor_kwargs_skips_unset_fields():
    params = AdapterParams(provider="openai", api_key="k", extra={"api_key": "ignored", "organization": "org"})

    kwargs = params.constructor_kwargs({"model": "gpt-4o"})

    assert kwargs == {"api_key": "k", "organization": "org", "model": "gpt-4o"}  # nosec B101


def test_adapter_params_validate_timeout():
    with pytest.raises(ValueError):
        AdapterParams(timeout_seconds=0)


@pytest.mark.parametrize("name", ProviderFactory.supported())
def test_every_adapter_satisfies_the_chat_protocol(name, monkeypatch):
    import google.generativeai as genai

    monkeypatch.setattr(genai, "configure", lambda **kw: None)
    adapter = ProviderFactory.create(name, api_key="key-for-tests")
    assert isinstance(adapter, ProviderAdapter)  # nosec B101
    assert adapter.name == name  # nosec B101


def test_capability_protocols():
    openai_adapter = ProviderFactory.create("openai", api_key="sk-test")
    cohere_adapter = ProviderFactory.create("cohere", api_key="co-test")
    assert isinstance(openai_adapter, SupportsEmbeddings) and isinstance(openai_adapter, SupportsImages)  # nosec B101
    assert isinstance(openai_adapter, SupportsAudio)  # nosec B101
    assert isinstance(cohere_adapter, SupportsEmbeddings)  # nosec B101
    assert not isinstance(cohere_adapter, SupportsImages)  # nosec B101

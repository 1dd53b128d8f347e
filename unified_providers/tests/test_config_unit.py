"""Configuration merge order: defaults, file, env, canonical keys, overrides."""

from __future__ import annotations

import json

import pytest

from unified_providers.config import get_http_timeout, get_model, get_provider_config, reset_config_cache
from unified_providers.config.env import env_prefix, get_env_var_candidates, is_placeholder, resolve_provider_key


@pytest.fixture()
def clean_env(monkeypatch):
    for name in (
        "OPENAI_API_KEY",
        "OPENAI_MODEL",
        "OPENROUTER_MODEL",
        "OPENROUTER_API_KEY",
        "GITHUB_COPILOT_MODEL",
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "GITHUB_COPILOT_BASE_URL",
        "PROVIDERS_HTTP_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_apply_without_any_source(clean_env):
    cfg = get_provider_config("openrouter")
    assert cfg["base_url"] == "https://openrouter.ai/api/v1"  # nosec B101
    assert "api_key" not in cfg  # nosec B101
    assert get_model("github-copilot") == "gpt-4o"  # nosec B101


def test_yaml_file_then_env_then_overrides(clean_env, tmp_path):
    path = tmp_path / "providers.yaml"
    path.write_text("openai:\n  model: gpt-from-file\n  organization: org-file\n", encoding="utf-8")
    clean_env.setenv("PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()

    assert get_provider_config("openai")["model"] == "gpt-from-file"  # nosec B101
    assert get_provider_config("openai")["organization"] == "org-file"  # nosec B101

    clean_env.setenv("OPENAI_MODEL", "gpt-from-env")
    assert get_provider_config("openai")["model"] == "gpt-from-env"  # nosec B101

    cfg = get_provider_config("openai", overrides={"model": "gpt-explicit", "api_key": None})
    assert cfg["model"] == "gpt-explicit"  # nosec B101


def test_json_file_is_accepted(clean_env, tmp_path):
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"mistral": {"model": "mistral-small-latest"}}), encoding="utf-8")
    clean_env.setenv("PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()
    assert get_model("mistral") == "mistral-small-latest"  # nosec B101


def test_dashed_provider_env_prefix(clean_env):
    clean_env.setenv("GITHUB_COPILOT_BASE_URL", "https://copilot.proxy.example")
    assert env_prefix("github-copilot") == "GITHUB_COPILOT"  # nosec B101
    assert get_provider_config("github-copilot")["base_url"] == "https://copilot.proxy.example"  # nosec B101


def test_alias_key_used_when_canonical_is_placeholder(clean_env):
    clean_env.setenv("GEMINI_API_KEY", "your-key-placeholder")
    clean_env.setenv("GOOGLE_API_KEY", "AIza-real")

    assert list(get_env_var_candidates("gemini")) == ["GEMINI_API_KEY", "GOOGLE_API_KEY"]  # nosec B101
    assert resolve_provider_key("gemini") == ("AIza-real", "GOOGLE_API_KEY")  # nosec B101
    assert get_provider_config("gemini")["api_key"] == "AIza-real"  # nosec B101


@pytest.mark.parametrize(
    "value, expected",
    [("changeme", True), ("sk-EXAMPLE", True), ("test_key", True), ("sk-live-123", False), (None, False)],
)
def test_is_placeholder(value, expected):
    assert is_placeholder(value) is expected  # nosec B101


def test_http_timeout_env(clean_env):
    assert get_http_timeout() > 0  # nosec B101
    clean_env.setenv("PROVIDERS_HTTP_TIMEOUT", "7.5")
    assert get_http_timeout() == 7.5  # nosec B101
    clean_env.setenv("PROVIDERS_HTTP_TIMEOUT", "soon")
    assert get_http_timeout() != 7.5  # nosec B101

"""unified_providers.config.defaults
=================================

Central place for small, stable default values used across the package.
These defaults can be overridden via environment variables or an external
configuration file (see :mod:`unified_providers.config`), but provide sensible
fallbacks for local development and tests.

This module intentionally avoids importing from other provider packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- HTTP transport ----
# Default per-request timeout for pooled httpx clients (seconds).
PROVIDERS_HTTP_TIMEOUT_DEFAULT_SECONDS = 60.0

# ---- OpenAI ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"
OPENAI_DEFAULT_IMAGE_MODEL = "dall-e-3"
OPENAI_DEFAULT_TTS_MODEL = "tts-1"

# ---- OpenRouter ----
OPENROUTER_DEFAULT_MODEL = "openrouter/auto"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
# Attribution header (X-Title) sent when no app name is configured.
OPENROUTER_DEFAULT_APP_NAME = "unified-providers"

# ---- GitHub Copilot ----
GITHUB_COPILOT_DEFAULT_MODEL = "gpt-4o"
GITHUB_COPILOT_DEFAULT_BASE_URL = "https://api.githubcopilot.com"
GITHUB_COPILOT_TOKEN_URL = "https://api.github.com/copilot_internal/v2/token"
GITHUB_COPILOT_USER_AGENT = "GitHubCopilotChat/0.26.7"
GITHUB_COPILOT_EDITOR_VERSION = "vscode/1.99.3"
GITHUB_COPILOT_EDITOR_PLUGIN_VERSION = "copilot-chat/0.26.7"
GITHUB_COPILOT_INTEGRATION_ID = "vscode-chat"

# ---- Anthropic ----
ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-20250514"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com"
# Messages API requires max_tokens; used when the request leaves it unset.
ANTHROPIC_DEFAULT_MAX_TOKENS = 1024
ANTHROPIC_API_VERSION = "2023-06-01"
ANTHROPIC_OAUTH_BETA = "oauth-2025-04-20"
ANTHROPIC_OAUTH_USER_AGENT = "ai-sdk/anthropic"

# ---- Gemini ----
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"
GEMINI_DEFAULT_EMBEDDING_MODEL = "models/text-embedding-004"

# ---- Cohere ----
COHERE_DEFAULT_MODEL = "command-r-plus"
COHERE_DEFAULT_BASE_URL = "https://api.cohere.com"
COHERE_DEFAULT_EMBEDDING_MODEL = "embed-english-v3.0"

# ---- Mistral ----
MISTRAL_DEFAULT_MODEL = "mistral-large-latest"
MISTRAL_DEFAULT_BASE_URL = "https://api.mistral.ai/v1"
MISTRAL_DEFAULT_EMBEDDING_MODEL = "mistral-embed"

# ---- OAuth ----
# A token is treated as expired this many seconds before its real expiry.
OAUTH_REFRESH_MARGIN_SECONDS = 300
# Wall-clock bound on the whole device-authorization polling loop.
OAUTH_DEVICE_POLL_DEADLINE_SECONDS = 15 * 60
OAUTH_DEFAULT_POLL_INTERVAL_SECONDS = 5
OAUTH_SLOW_DOWN_INCREMENT_SECONDS = 5
OAUTH_DEVICE_CODE_DEFAULT_EXPIRES_IN = 900

# ---- SQLite token storage ----
SQLITE_BUSY_TIMEOUT_MS = 5000
SQLITE_JOURNAL_MODE = "WAL"
SQLITE_SYNCHRONOUS = "NORMAL"

"""GitHub Copilot secondary token exchange."""
from __future__ import annotations

from typing import Dict

import httpx

from ...base.errors import ErrorCode, ProviderError
from ...config.defaults import (
    GITHUB_COPILOT_EDITOR_PLUGIN_VERSION,
    GITHUB_COPILOT_EDITOR_VERSION,
    GITHUB_COPILOT_INTEGRATION_ID,
    GITHUB_COPILOT_USER_AGENT,
)


def copilot_editor_headers() -> Dict[str, str]:
    """Editor identification headers expected by the Copilot endpoints."""
    return {
        "User-Agent": GITHUB_COPILOT_USER_AGENT,
        "Editor-Version": GITHUB_COPILOT_EDITOR_VERSION,
        "Editor-Plugin-Version": GITHUB_COPILOT_EDITOR_PLUGIN_VERSION,
        "Copilot-Integration-Id": GITHUB_COPILOT_INTEGRATION_ID,
    }


async def exchange_copilot_token(client: httpx.AsyncClient, token_url: str, github_token: str) -> str:
    """Exchange a stored GitHub OAuth token for a short-lived Copilot API token.

    The result is not cached; every access performs a fresh exchange.

    Raises:
        ProviderError: ``request_failed`` with the HTTP status when the
            exchange is rejected.
    """
    headers = {"Accept": "application/json", "Authorization": f"Bearer {github_token}"}
    headers |= copilot_editor_headers()
    response = await client.get(token_url, headers=headers)
    if response.status_code >= 400:
        raise ProviderError(
            code=ErrorCode.REQUEST_FAILED,
            message=f"Copilot token exchange failed: {response.status_code}",
            provider="github-copilot",
            http_status=response.status_code,
        )
    return response.json()["token"]


__all__ = ["copilot_editor_headers", "exchange_copilot_token"]

"""Static OAuth endpoint table.

Each entry fixes the flow (PKCE or device authorization), endpoints, the
public client id and the default scopes of one vendor.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional, Tuple

from ...base.errors import OAuthErrorType, ProviderError
from ...config.defaults import GITHUB_COPILOT_TOKEN_URL, GITHUB_COPILOT_USER_AGENT

OAuthFlow = Literal["pkce", "device"]


@dataclass(frozen=True)
class OAuthProviderConfig:
    """Endpoints and defaults for one OAuth vendor.

    Attributes:
        flow: ``"pkce"`` or ``"device"``.
        auth_url: Authorization URL (PKCE) or device-code endpoint (device).
        token_url: Token endpoint for code, device and refresh grants.
        default_client_id: Public client id used when the config sets none.
        default_scopes: Scopes requested when the config sets none.
        redirect_uri: PKCE redirect URI.
        device_poll_json: Device polls are sent as JSON instead of a form.
        user_agent: User-Agent sent on device polls.
        secondary_token_url: Endpoint exchanging the stored token for a
            short-lived API token on every access.
    """

    flow: OAuthFlow
    auth_url: str
    token_url: str
    default_client_id: str
    default_scopes: Tuple[str, ...]
    redirect_uri: Optional[str] = None
    device_poll_json: bool = False
    user_agent: Optional[str] = None
    secondary_token_url: Optional[str] = None


OAUTH_PROVIDERS: Dict[str, OAuthProviderConfig] = {
    "anthropic": OAuthProviderConfig(
        flow="pkce",
        auth_url="https://claude.ai/oauth/authorize",
        token_url="https://console.anthropic.com/v1/oauth/token",
        redirect_uri="https://console.anthropic.com/oauth/code/callback",
        default_client_id="9d1c250a-e61b-44d9-88ed-5944d1962f5e",
        default_scopes=("org:create_api_key", "user:profile", "user:inference"),
    ),
    "github-copilot": OAuthProviderConfig(
        flow="device",
        auth_url="https://github.com/login/device/code",
        token_url="https://github.com/login/oauth/access_token",
        default_client_id="Iv1.b507a08c87ecfe98",
        default_scopes=("read:user",),
        device_poll_json=True,
        user_agent=GITHUB_COPILOT_USER_AGENT,
        secondary_token_url=GITHUB_COPILOT_TOKEN_URL,
    ),
}


def get_oauth_provider(provider: str) -> OAuthProviderConfig:
    """Return the table entry for ``provider``.

    Raises:
        ProviderError: ``invalid_client`` for an unknown provider.
    """
    cfg = OAUTH_PROVIDERS.get(provider)
    if cfg is None:
        raise ProviderError(
            code=OAuthErrorType.INVALID_CLIENT,
            message=f"Unsupported OAuth provider: {provider}",
            provider=provider,
        )
    return cfg


__all__ = ["OAuthFlow", "OAuthProviderConfig", "OAUTH_PROVIDERS", "get_oauth_provider"]

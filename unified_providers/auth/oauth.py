"""OAuth public surface.

Re-exports the engine, token types, storage implementations and the
``httpx.Auth`` integration from ``oauth_parts``.
"""

from ..base.interfaces import TokenStorage
from .oauth_parts import (
    OAUTH_PROVIDERS,
    AuthorizationRequest,
    DeviceAuthorization,
    DeviceFlowState,
    InMemoryTokenStorage,
    OAuthBearerAuth,
    OAuthConfig,
    OAuthEngine,
    OAuthProviderConfig,
    OAuthToken,
    SqliteTokenStorage,
    anthropic_oauth_headers,
    build_authorization_url,
    copilot_headers,
    generate_code_challenge,
    generate_code_verifier,
    get_oauth_provider,
)

__all__ = [
    "TokenStorage",
    "OAuthToken",
    "OAuthConfig",
    "OAUTH_PROVIDERS",
    "OAuthProviderConfig",
    "get_oauth_provider",
    "AuthorizationRequest",
    "build_authorization_url",
    "generate_code_challenge",
    "generate_code_verifier",
    "DeviceAuthorization",
    "DeviceFlowState",
    "InMemoryTokenStorage",
    "SqliteTokenStorage",
    "OAuthEngine",
    "OAuthBearerAuth",
    "anthropic_oauth_headers",
    "copilot_headers",
]

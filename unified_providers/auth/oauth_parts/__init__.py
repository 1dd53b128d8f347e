"""OAuth parts package.

One concern per module; import through :mod:`unified_providers.auth.oauth`.
"""

from .token import OAuthToken
from .config import OAuthConfig
from .providers import OAUTH_PROVIDERS, OAuthProviderConfig, get_oauth_provider
from .pkce import AuthorizationRequest, build_authorization_url, generate_code_challenge, generate_code_verifier
from .device import DeviceAuthorization, DeviceFlowState
from .memory_storage import InMemoryTokenStorage
from .sqlite_storage import SqliteTokenStorage
from .engine import OAuthEngine
from .transport import OAuthBearerAuth, anthropic_oauth_headers, copilot_headers

__all__ = [
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

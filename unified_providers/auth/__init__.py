"""Authentication helpers for provider adapters."""

from .oauth import (
    InMemoryTokenStorage,
    OAuthBearerAuth,
    OAuthConfig,
    OAuthEngine,
    OAuthToken,
    SqliteTokenStorage,
    TokenStorage,
)

__all__ = [
    "InMemoryTokenStorage",
    "OAuthBearerAuth",
    "OAuthConfig",
    "OAuthEngine",
    "OAuthToken",
    "SqliteTokenStorage",
    "TokenStorage",
]

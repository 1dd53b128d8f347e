"""OAuth engine configuration."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ...base.interfaces import TokenStorage


@dataclass
class OAuthConfig:
    """Per-provider OAuth settings.

    Attributes:
        provider: Key into ``OAUTH_PROVIDERS`` (``"anthropic"``,
            ``"github-copilot"``).
        token_storage: Where tokens are persisted.
        client_id: Overrides the provider's default client id.
        client_secret: Sent on token requests when set.
        scopes: Overrides the provider's default scopes.
        auto_refresh: Refresh expired tokens transparently.
    """

    provider: str
    token_storage: TokenStorage
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    scopes: Optional[List[str]] = None
    auto_refresh: bool = True


__all__ = ["OAuthConfig"]

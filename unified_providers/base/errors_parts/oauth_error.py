"""
OAuth error vocabulary attached to provider errors.

The set of OAuth error types is closed: it covers the RFC 6749 / RFC 8628
codes returned by token endpoints plus the engine's own ``token_expired`` and
``token_refresh_failed``. Callers use it to tell a still-pending device
authorization apart from a permanently denied one.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class OAuthErrorType(str, Enum):
    """Closed set of OAuth error types."""

    INVALID_REQUEST = "invalid_request"
    INVALID_CLIENT = "invalid_client"
    INVALID_GRANT = "invalid_grant"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"
    INVALID_SCOPE = "invalid_scope"
    ACCESS_DENIED = "access_denied"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_REFRESH_FAILED = "token_refresh_failed"
    AUTHORIZATION_PENDING = "authorization_pending"
    SLOW_DOWN = "slow_down"
    EXPIRED_TOKEN = "expired_token"


OAUTH_ERROR_TYPES = frozenset(t.value for t in OAuthErrorType)


@dataclass
class OAuthErrorDetail:
    """OAuth-specific detail carried by a :class:`ProviderError`."""

    type: str
    description: Optional[str] = None
    uri: Optional[str] = None
    provider: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


__all__ = ["OAuthErrorType", "OAUTH_ERROR_TYPES", "OAuthErrorDetail"]

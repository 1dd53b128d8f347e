"""OAuth token value object.

The only entity in the provider layer with a lifetime beyond one call: it is
created by a completed flow, replaced wholesale on refresh and removed on
revoke. Persistence goes through a ``TokenStorage`` implementation.
"""
from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ...config.defaults import OAUTH_REFRESH_MARGIN_SECONDS


@dataclass
class OAuthToken:
    """Bearer credential issued by an OAuth token endpoint.

    Attributes:
        access_token: Bearer value sent to the vendor API.
        refresh_token: Optional long-lived refresh credential.
        expires_at: Expiry as unix seconds; ``None`` means no known expiry.
        token_type: Usually ``"Bearer"``.
        scopes: Granted scopes.
    """

    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    token_type: str = "Bearer"
    scopes: List[str] = field(default_factory=list)

    def is_valid(self, now: Optional[float] = None, margin: int = OAUTH_REFRESH_MARGIN_SECONDS) -> bool:
        """Return False from ``margin`` seconds before expiry onwards.

        A token without ``expires_at`` is always valid.
        """
        if self.expires_at is None:
            return True
        current = time.time() if now is None else now
        return self.expires_at > current + margin

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OAuthToken":
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_at=data.get("expires_at"),
            token_type=data.get("token_type") or "Bearer",
            scopes=list(data.get("scopes") or []),
        )

    @classmethod
    def from_token_response(
        cls,
        data: Mapping[str, Any],
        *,
        now: float,
        fallback_scopes: Optional[List[str]] = None,
        fallback_refresh_token: Optional[str] = None,
    ) -> "OAuthToken":
        """Build a token from a token-endpoint JSON body.

        ``expires_in`` becomes an absolute ``expires_at``; a missing
        ``refresh_token`` falls back to ``fallback_refresh_token`` (refresh
        responses that do not rotate it).
        """
        expires_in = data.get("expires_in")
        scope = data.get("scope")
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token") or fallback_refresh_token,
            expires_at=int(now) + int(expires_in) if expires_in else None,
            token_type=data.get("token_type") or "Bearer",
            scopes=scope.split(" ") if scope else list(fallback_scopes or []),
        )


__all__ = ["OAuthToken"]

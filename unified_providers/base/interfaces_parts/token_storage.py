"""TokenStorage Protocol (single-class module).

Persistence seam for OAuth tokens. The OAuth engine does not serialize
access, so implementations shared between engines must tolerate concurrent
calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...auth.oauth_parts.token import OAuthToken


@runtime_checkable
class TokenStorage(Protocol):
    """Async key/value store of one ``OAuthToken`` per provider key."""

    async def store_tokens(self, provider: str, token: "OAuthToken") -> None:
        ...

    async def get_tokens(self, provider: str) -> Optional["OAuthToken"]:
        ...

    async def remove_tokens(self, provider: str) -> None:
        ...

    async def has_tokens(self, provider: str) -> bool:
        ...

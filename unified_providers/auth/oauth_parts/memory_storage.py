"""In-process token storage."""
from __future__ import annotations

from typing import Dict, Optional

from .token import OAuthToken


class InMemoryTokenStorage:
    """Dictionary-backed ``TokenStorage``; tokens live for the process lifetime."""

    def __init__(self) -> None:
        self._tokens: Dict[str, OAuthToken] = {}

    async def store_tokens(self, provider: str, token: OAuthToken) -> None:
        self._tokens[provider] = token

    async def get_tokens(self, provider: str) -> Optional[OAuthToken]:
        return self._tokens.get(provider)

    async def remove_tokens(self, provider: str) -> None:
        self._tokens.pop(provider, None)

    async def has_tokens(self, provider: str) -> bool:
        return provider in self._tokens


__all__ = ["InMemoryTokenStorage"]

"""Parsing of OAuth token-endpoint error bodies."""
from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

from ...base.errors import OAUTH_ERROR_TYPES, OAuthErrorType, ProviderError


def parse_token_error(body: Any) -> Tuple[str, Optional[str]]:
    """Return ``(error_type, description)`` from a token endpoint error body.

    Accepts ``{"error": "...", "error_description": "..."}`` and the
    ``{"error": {"type": ..., "message": ...}}`` variant; anything else is
    ``invalid_grant``.
    """
    if not isinstance(body, Mapping):
        return OAuthErrorType.INVALID_GRANT.value, None
    err = body.get("error")
    description = body.get("error_description")
    if isinstance(err, Mapping):
        return str(err.get("type") or OAuthErrorType.INVALID_GRANT.value), err.get("message") or description
    if isinstance(err, str) and err:
        return err, description or err
    return OAuthErrorType.INVALID_GRANT.value, description


def oauth_error(
    provider: str,
    error_type: str,
    message: str,
    *,
    http_status: Optional[int] = None,
    description: Optional[str] = None,
    cause: Optional[BaseException] = None,
) -> ProviderError:
    """Build a ``ProviderError`` whose code is an OAuth error type."""
    context = {"error_description": description} if description else {}
    return ProviderError(
        code=error_type,
        message=message,
        provider=provider,
        http_status=http_status,
        cause=cause,
        context=context,
    )


def refresh_error_type(body: Any) -> str:
    """Map a refresh failure body to an error type.

    Known OAuth error strings are kept; everything else becomes
    ``token_refresh_failed``.
    """
    err = body.get("error") if isinstance(body, Mapping) else None
    if isinstance(err, str) and err in OAUTH_ERROR_TYPES:
        return err
    return OAuthErrorType.TOKEN_REFRESH_FAILED.value


__all__ = ["parse_token_error", "oauth_error", "refresh_error_type"]

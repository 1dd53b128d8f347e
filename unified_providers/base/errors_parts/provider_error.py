"""
Structured provider error exception type.

Every failure that leaves an adapter or the OAuth engine is a `ProviderError`
carrying a machine code, the provider key, the HTTP status when one exists,
and the original exception as ``cause``. Retry policy stays with the caller;
``is_retryable`` only reports whether a retry is sensible.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .error_code import ErrorCode
from .oauth_error import OAUTH_ERROR_TYPES, OAuthErrorDetail, OAuthErrorType


_RETRYABLE_CODES = frozenset({ErrorCode.NETWORK_ERROR.value, ErrorCode.TIMEOUT_ERROR.value})

_OAUTH_USER_MESSAGES: Dict[str, str] = {
    OAuthErrorType.ACCESS_DENIED.value: "OAuth access denied. Please re-authenticate.",
    OAuthErrorType.TOKEN_EXPIRED.value: "OAuth token expired. Please re-authenticate.",
    OAuthErrorType.EXPIRED_TOKEN.value: "OAuth token expired. Please re-authenticate.",
    OAuthErrorType.TOKEN_REFRESH_FAILED.value: "Failed to refresh OAuth token. Please re-authenticate.",
    OAuthErrorType.AUTHORIZATION_PENDING.value: (
        "OAuth authorization pending. Please complete the authorization process."
    ),
    OAuthErrorType.INVALID_CLIENT.value: "Invalid OAuth client configuration.",
    OAuthErrorType.INVALID_GRANT.value: "Invalid OAuth grant. Please re-authenticate.",
}
_OAUTH_DEFAULT_MESSAGE = "OAuth authentication error. Please re-authenticate."

_STATUS_USER_MESSAGES: Dict[int, str] = {
    401: "Authentication failed. Please check your API key.",
    403: "Access denied. Please check your permissions.",
    429: "Rate limit exceeded. Please try again later.",
    500: "Server error. Please try again later.",
}
_GENERIC_USER_MESSAGE = "An unexpected error occurred. Please try again."


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error.

    Attributes:
        code: Machine code. One of :class:`ErrorCode`, an OAuth error type, or
            a vendor error type taken from the response body.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g. ``"openai"``).
        http_status: HTTP status code of the failed upstream call, if any.
        cause: Original exception for diagnostics.
        context: Extra structured fields (operation, vendor body, ...).
        oauth_error: OAuth detail, populated automatically when ``code`` is
            one of the OAuth error types.
    """

    code: str
    message: str
    provider: Optional[str] = None
    http_status: Optional[int] = None
    cause: Optional[BaseException] = None
    context: Dict[str, Any] = field(default_factory=dict)
    oauth_error: Optional[OAuthErrorDetail] = None

    def __post_init__(self) -> None:
        if isinstance(self.code, Enum):
            self.code = self.code.value
        self.code = str(self.code)
        if self.oauth_error is None and self.code in OAUTH_ERROR_TYPES:
            self.oauth_error = OAuthErrorDetail(
                type=self.code,
                description=self.context.get("error_description") or self.message,
                uri=self.context.get("error_uri"),
                provider=self.provider,
            )

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, code, status, and message."""
        status = f" [{self.http_status}]" if self.http_status is not None else ""
        return f"{self.provider or '-'} {self.code}{status}: {self.message}"

    def is_retryable(self) -> bool:
        """True iff status is 429 or >= 500, or the code is a transport failure."""
        if self.http_status is not None and (self.http_status == 429 or self.http_status >= 500):
            return True
        return self.code in _RETRYABLE_CODES

    def is_oauth_error(self) -> bool:
        return self.oauth_error is not None

    def is_token_expired(self) -> bool:
        return self.code in (OAuthErrorType.TOKEN_EXPIRED.value, OAuthErrorType.EXPIRED_TOKEN.value)

    def is_auth_required(self) -> bool:
        return self.code in (OAuthErrorType.ACCESS_DENIED.value, OAuthErrorType.UNAUTHORIZED_CLIENT.value)

    def get_user_message(self) -> str:
        """Return a fixed human sentence describing the failure.

        OAuth errors take precedence over the HTTP status; unknown statuses
        fall back to a generic sentence.
        """
        if self.oauth_error is not None:
            return _OAUTH_USER_MESSAGES.get(self.oauth_error.type, _OAUTH_DEFAULT_MESSAGE)
        if self.http_status is not None and self.http_status in _STATUS_USER_MESSAGES:
            return _STATUS_USER_MESSAGES[self.http_status]
        return _GENERIC_USER_MESSAGE

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable view (the cause is reduced to its repr)."""
        payload: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "provider": self.provider,
            "http_status": self.http_status,
            "retryable": self.is_retryable(),
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        if self.context:
            payload["context"] = dict(self.context)
        if self.oauth_error is not None:
            payload["oauth_error"] = self.oauth_error.to_dict()
        return {k: v for k, v in payload.items() if v is not None}


__all__ = ["ProviderError"]

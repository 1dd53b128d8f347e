"""PKCE (RFC 7636) helpers for the authorization-code flow."""
from __future__ import annotations

import base64
import hashlib
import secrets
from dataclasses import dataclass
from typing import Sequence
from urllib.parse import quote


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def generate_code_verifier() -> str:
    """Return 32 random bytes, base64url-encoded without padding."""
    return _b64url(secrets.token_bytes(32))


def generate_code_challenge(verifier: str) -> str:
    """Return the S256 challenge for ``verifier``."""
    return _b64url(hashlib.sha256(verifier.encode("ascii")).digest())


@dataclass
class AuthorizationRequest:
    """Result of initiating a PKCE flow.

    The user opens ``url``; the verifier must be kept for ``complete_auth``.
    """

    url: str
    code_verifier: str


def build_authorization_url(
    auth_url: str,
    *,
    client_id: str,
    redirect_uri: str,
    scopes: Sequence[str],
    code_verifier: str,
) -> str:
    """Build the authorization URL; the verifier doubles as ``state``."""
    params = [
        ("code", "true"),
        ("client_id", client_id),
        ("response_type", "code"),
        ("redirect_uri", quote(redirect_uri, safe="")),
        ("scope", quote(" ".join(scopes), safe="")),
        ("code_challenge", generate_code_challenge(code_verifier)),
        ("code_challenge_method", "S256"),
        ("state", code_verifier),
    ]
    return auth_url + "?" + "&".join(f"{k}={v}" for k, v in params)


__all__ = [
    "AuthorizationRequest",
    "generate_code_verifier",
    "generate_code_challenge",
    "build_authorization_url",
]

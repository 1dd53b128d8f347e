"""
Normalized provider error codes (taxonomy).

Defines the `ErrorCode` enumeration used across provider adapters and error
handling utilities. Values are lowercase snake_case and are considered a stable
public contract for logging and programmatic handling. Vendor-specific codes
(e.g. ``"overloaded_error"``) and OAuth error types may also appear as a
``ProviderError.code``; those are plain strings outside this enumeration.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth_error"
    RATE_LIMIT = "rate_limit_error"
    NETWORK_ERROR = "network_error"
    TIMEOUT_ERROR = "timeout_error"
    CANCELLED = "cancelled"
    UNSUPPORTED_CONTENT = "unsupported_content"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    REQUEST_FAILED = "request_failed"
    UNKNOWN = "unknown_error"


__all__ = ["ErrorCode"]

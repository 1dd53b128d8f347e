"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``unified_providers.base.errors_parts`` to keep a single stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.oauth_error import OAUTH_ERROR_TYPES, OAuthErrorDetail, OAuthErrorType
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import (
    classify_exception,
    unsupported_content,
    validation_error,
    vendor_error_code,
    wrap_exception,
)

__all__ = [
    "ErrorCode",
    "OAuthErrorType",
    "OAuthErrorDetail",
    "OAUTH_ERROR_TYPES",
    "ProviderError",
    "classify_exception",
    "wrap_exception",
    "vendor_error_code",
    "unsupported_content",
    "validation_error",
]

"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `unified_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .oauth_error import OAUTH_ERROR_TYPES, OAuthErrorDetail, OAuthErrorType
from .provider_error import ProviderError
from .classification import (
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

"""unified_providers package

One calling convention for several LLM vendors.

Purpose:
    Callers build a :class:`CompletionRequest`, obtain an adapter from the
    factory (for example ``create("anthropic")``) and receive
    :class:`CompletionResponse` objects or streams of
    :class:`CompletionChunk` regardless of the vendor behind it. Vendor SDKs
    are imported only when their adapter is created.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`
    - Factory: :func:`create`, :class:`ProviderFactory`
    - Models: request/response DTOs from :mod:`unified_providers.base.models`
"""

from typing import Any, Optional

from .base.dto import AdapterParams
from .base.errors import ErrorCode, ProviderError
from .base.factory import ProviderFactory, UnknownProviderError
from .base.models import (
    CompletionChunk,
    CompletionRequest,
    CompletionResponse,
    ContentPart,
    Message,
    ModelInfo,
    TokenUsage,
    ToolCall,
    ToolDefinition,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ProviderError",
    "ErrorCode",
    "create",
    "ProviderFactory",
    "UnknownProviderError",
    "AdapterParams",
    "ContentPart",
    "Message",
    "ToolCall",
    "ToolDefinition",
    "TokenUsage",
    "CompletionRequest",
    "CompletionResponse",
    "CompletionChunk",
    "ModelInfo",
]


def create(provider_name: str, *, params: Optional[AdapterParams] = None, **kwargs: Any):
    """Instantiate a provider adapter via :class:`ProviderFactory`.

    Parameters:
        provider_name: Canonical provider name (for example ``"openai"``).
        params: Optional typed :class:`AdapterParams`; ``kwargs`` win on
            overlapping fields.
        **kwargs: Adapter constructor keyword arguments.

    Raises:
        UnknownProviderError: If the name is not registered or the adapter
            cannot be constructed.
    """
    return ProviderFactory.create(provider_name, params=params, **kwargs)

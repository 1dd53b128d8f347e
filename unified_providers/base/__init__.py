"""
Providers Base Package

Exports provider-agnostic contracts, DTOs, the error taxonomy, streaming
engines and the provider factory for use by the vendor adapters and callers.

Layout:
- Interfaces: the adapter and token-storage protocols
- Models (DTOs): requests, responses, chunks and tool calls
- Errors: ``ProviderError`` and its classification helpers
- Streaming: reconstruction engines and the stream driver
- Factory: lazy creation of provider adapters by canonical name
"""

from .factory import ProviderFactory, UnknownProviderError, create_provider
from .dto import AdapterParams
from .errors import ErrorCode, OAuthErrorType, ProviderError, wrap_exception
from .interfaces import (
    ProviderAdapter,
    SupportsAudio,
    SupportsEmbeddings,
    SupportsImages,
    TokenStorage,
)
from .models import (
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
from .streaming import StreamMetrics, collect_stream, drive_stream, finalize_partial_tool_calls

__all__ = [
    # Models
    "ContentPart",
    "Message",
    "ToolCall",
    "ToolDefinition",
    "TokenUsage",
    "CompletionRequest",
    "CompletionResponse",
    "CompletionChunk",
    "ModelInfo",
    # Interfaces
    "ProviderAdapter",
    "SupportsEmbeddings",
    "SupportsImages",
    "SupportsAudio",
    "TokenStorage",
    # Errors
    "ProviderError",
    "ErrorCode",
    "OAuthErrorType",
    "wrap_exception",
    # Streaming
    "StreamMetrics",
    "drive_stream",
    "collect_stream",
    "finalize_partial_tool_calls",
    # Factory
    "AdapterParams",
    "ProviderFactory",
    "UnknownProviderError",
    "create_provider",
]

"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``unified_providers.base.models_parts`` so callers have one stable import path.
"""

from .models_parts.content_part import ContentPart, ContentPartType
from .models_parts.tool_call import ToolCall, ToolCallDelta, PartialToolCall
from .models_parts.message import Message, Role
from .models_parts.tool_definition import (
    NamedToolChoice,
    ToolChoice,
    ToolChoiceMode,
    ToolDefinition,
    tool_choice_mode,
)
from .models_parts.token_usage import TokenUsage
from .models_parts.completion_request import CompletionRequest, ResponseFormat
from .models_parts.completion_response import (
    FINISH_REASONS,
    CompletionResponse,
    FinishReason,
    map_finish_reason,
)
from .models_parts.completion_chunk import CompletionChunk
from .models_parts.model_info import ModelInfo
from .models_parts.generation import (
    AudioRequest,
    AudioResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    GeneratedImage,
    ImageRequest,
    ImageResponse,
)

__all__ = [
    "ContentPart",
    "ContentPartType",
    "ToolCall",
    "ToolCallDelta",
    "PartialToolCall",
    "Message",
    "Role",
    "NamedToolChoice",
    "ToolChoice",
    "ToolChoiceMode",
    "ToolDefinition",
    "tool_choice_mode",
    "TokenUsage",
    "CompletionRequest",
    "ResponseFormat",
    "CompletionResponse",
    "FinishReason",
    "FINISH_REASONS",
    "map_finish_reason",
    "CompletionChunk",
    "ModelInfo",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "ImageRequest",
    "GeneratedImage",
    "ImageResponse",
    "AudioRequest",
    "AudioResponse",
]

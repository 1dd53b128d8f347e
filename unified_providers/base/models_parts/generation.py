"""
Request/response DTOs for the optional non-chat capabilities.

Embeddings, image generation and text-to-speech are offered by a subset of
vendors; adapters that support them implement the matching capability
protocol in :mod:`unified_providers.base.interfaces`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from .token_usage import TokenUsage


@dataclass
class EmbeddingRequest:
    model: str
    input: Union[str, List[str]]
    dimensions: Optional[int] = None
    input_type: Optional[str] = None

    def inputs(self) -> List[str]:
        return [self.input] if isinstance(self.input, str) else list(self.input)


@dataclass
class EmbeddingResponse:
    embeddings: List[List[float]]
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)


@dataclass
class ImageRequest:
    prompt: str
    model: str
    size: Optional[str] = None
    quality: Optional[str] = None
    n: int = 1


@dataclass
class GeneratedImage:
    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None


@dataclass
class ImageResponse:
    images: List[GeneratedImage]
    created: Optional[int] = None


@dataclass
class AudioRequest:
    """Text-to-speech request."""

    text: str
    model: str
    voice: str = "alloy"
    format: Literal["mp3", "opus", "aac", "flac", "wav", "pcm"] = "mp3"
    speed: Optional[float] = None


@dataclass
class AudioResponse:
    audio: bytes
    format: str
    metadata: Dict[str, Any] = field(default_factory=dict)


__all__ = [
    "EmbeddingRequest",
    "EmbeddingResponse",
    "ImageRequest",
    "GeneratedImage",
    "ImageResponse",
    "AudioRequest",
    "AudioResponse",
]

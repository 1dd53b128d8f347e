"""OpenAI request converters.

Chat conversion is the shared chat-completions mapping; this module adds the
payloads of the non-chat endpoints (embeddings, images, speech).
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.models import AudioRequest, EmbeddingRequest, ImageRequest
from ..base.openai_style_parts import OPENAI_TOOL_CHOICES, build_chat_payload, to_openai_messages, to_openai_tools

__all__ = [
    "OPENAI_TOOL_CHOICES",
    "build_chat_payload",
    "to_openai_messages",
    "to_openai_tools",
    "embedding_payload",
    "image_payload",
    "speech_payload",
]


def embedding_payload(request: EmbeddingRequest) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"model": request.model, "input": request.inputs()}
    if request.dimensions is not None:
        payload["dimensions"] = request.dimensions
    return payload


def image_payload(request: ImageRequest) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"model": request.model, "prompt": request.prompt, "n": request.n}
    if request.size:
        payload["size"] = request.size
    if request.quality:
        payload["quality"] = request.quality
    return payload


def speech_payload(request: AudioRequest) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": request.model,
        "input": request.text,
        "voice": request.voice,
        "response_format": request.format,
    }
    if request.speed is not None:
        payload["speed"] = request.speed
    return payload

"""OpenAI adapter built on ``BaseOpenAIStyleAdapter``.

Chat and streaming are inherited from the shared chat-completions base. This
module adds client construction and the optional embeddings, image and
speech capabilities, each routed through the same error boundary.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from openai import AsyncOpenAI

from ..base.adapter_parts import resolve_settings
from ..base.http import get_timeout
from ..base.logging import normalized_log_event
from ..base.models import (
    AudioRequest,
    AudioResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    ImageRequest,
    ImageResponse,
)
from ..base.openai_style_parts import BaseOpenAIStyleAdapter
from ..config.defaults import OPENAI_DEFAULT_EMBEDDING_MODEL, OPENAI_DEFAULT_IMAGE_MODEL, OPENAI_DEFAULT_TTS_MODEL
from .converters import embedding_payload, image_payload, speech_payload
from .normalizers import from_embedding_response, from_image_response

__all__ = ["OpenAIAdapter"]


class OpenAIAdapter(BaseOpenAIStyleAdapter):
    """OpenAI chat-completions adapter with embeddings, images and speech."""

    name = "openai"

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        organization: Optional[str] = None,
        client: Optional[Any] = None,
    ) -> None:
        init, cfg = resolve_settings(
            self.name,
            model=model,
            api_key=api_key,
            base_url=base_url,
            headers=headers,
            timeout_seconds=timeout_seconds,
        )
        super().__init__(init)
        self._organization = organization or cfg.get("organization")
        self._client = client

    def _make_client(self) -> AsyncOpenAI:
        kwargs: Dict[str, Any] = {
            "api_key": self._api_key,
            "timeout": self._timeout_seconds or get_timeout(),
            "max_retries": 0,
        }
        if self._base_url:
            kwargs["base_url"] = self._base_url
        if self._organization:
            kwargs["organization"] = self._organization
        if self._headers:
            kwargs["default_headers"] = dict(self._headers)
        return AsyncOpenAI(**kwargs)

    # ----- Capabilities -----
    async def generate_embedding(self, request: EmbeddingRequest) -> EmbeddingResponse:
        model = request.model or OPENAI_DEFAULT_EMBEDDING_MODEL
        payload = embedding_payload(request)
        payload["model"] = model
        ctx = self._ctx(model, "embeddings")
        raw = await self._guarded("embedding generation", ctx, lambda: self.client().embeddings.create(**payload))
        response = from_embedding_response(raw, model)
        normalized_log_event(
            self._logger,
            "embeddings.end",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=bool(response.embeddings),
            tokens=response.usage,
            count=len(response.embeddings),
        )
        return response

    async def generate_image(self, request: ImageRequest) -> ImageResponse:
        model = request.model or OPENAI_DEFAULT_IMAGE_MODEL
        payload = image_payload(request)
        payload["model"] = model
        raw = await self._guarded(
            "image generation",
            self._ctx(model, "images"),
            lambda: self.client().images.generate(**payload),
        )
        return from_image_response(raw)

    async def generate_audio(self, request: AudioRequest) -> AudioResponse:
        """Synthesize speech; the whole body is read into memory."""
        model = request.model or OPENAI_DEFAULT_TTS_MODEL
        payload = speech_payload(request)
        payload["model"] = model
        raw = await self._guarded(
            "audio generation",
            self._ctx(model, "audio"),
            lambda: self.client().audio.speech.create(**payload),
        )
        return AudioResponse(audio=raw.content, format=request.format, metadata={"model": model, "voice": request.voice})

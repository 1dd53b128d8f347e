"""SupportsImages Protocol (single-class module)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import ImageRequest, ImageResponse


@runtime_checkable
class SupportsImages(Protocol):
    """Capability marker for adapters that can generate images from a prompt."""

    async def generate_image(self, request: ImageRequest) -> ImageResponse:  # pragma: no cover - interface
        ...

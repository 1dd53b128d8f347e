"""OpenAI response normalizers for chat and the non-chat endpoints."""

from __future__ import annotations

from typing import Any

from ..base.models import GeneratedImage, ImageResponse
from ..base.openai_style_parts import (
    OPENAI_FINISH_REASONS,
    from_embedding_response,
    from_openai_response,
    openai_model_info,
    parse_openai_usage,
)
from ..base.utils import get_field, get_list

__all__ = [
    "OPENAI_FINISH_REASONS",
    "from_openai_response",
    "openai_model_info",
    "parse_openai_usage",
    "from_embedding_response",
    "from_image_response",
]


def from_image_response(raw: Any) -> ImageResponse:
    return ImageResponse(
        images=[
            GeneratedImage(
                url=get_field(item, "url"),
                b64_json=get_field(item, "b64_json"),
                revised_prompt=get_field(item, "revised_prompt"),
            )
            for item in get_list(raw, "data")
        ],
        created=get_field(raw, "created"),
    )

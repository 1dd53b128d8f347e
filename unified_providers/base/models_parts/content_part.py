"""
Multimodal content part model for chat messages.

This module defines the `ContentPart` dataclass and its associated
`ContentPartType` literal. A message may carry an ordered list of parts mixing
text with images, video, audio, or documents. Converters decide per vendor
which variants have a wire representation; variants without one are rejected
rather than dropped.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Literal, Optional


# Closed set of content variants understood by every converter.
ContentPartType = Literal[
    "text",
    "image",
    "video",
    "audio",
    "document",
]


@dataclass
class ContentPart:
    """A single unit of multimodal message content.

    Attributes:
        type: The variant tag (``"text"``, ``"image"``, ``"video"``,
            ``"audio"`` or ``"document"``).
        text: Text payload for ``"text"`` parts.
        url: Payload reference for media parts. May be a ``data:`` URL, raw
            base64, or an ``http(s)://`` reference; converters normalize it
            through :mod:`unified_providers.base.utils.media`.
        mime_type: Optional MIME type overriding whatever the payload implies.

    Methods:
        is_text: True for ``"text"`` parts.
        to_dict: JSON-serializable dictionary of the part.
    """

    type: ContentPartType
    text: Optional[str] = None
    url: Optional[str] = None
    mime_type: Optional[str] = None

    @classmethod
    def of_text(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def of_image(cls, url: str, mime_type: Optional[str] = None) -> "ContentPart":
        return cls(type="image", url=url, mime_type=mime_type)

    @classmethod
    def of_video(cls, url: str, mime_type: Optional[str] = None) -> "ContentPart":
        return cls(type="video", url=url, mime_type=mime_type)

    @classmethod
    def of_audio(cls, url: str, mime_type: Optional[str] = None) -> "ContentPart":
        return cls(type="audio", url=url, mime_type=mime_type)

    @classmethod
    def of_document(cls, url: str, mime_type: Optional[str] = None) -> "ContentPart":
        return cls(type="document", url=url, mime_type=mime_type)

    def is_text(self) -> bool:
        return self.type == "text"

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the object."""
        return {k: v for k, v in asdict(self).items() if v is not None}


__all__ = [
    "ContentPart",
    "ContentPartType",
]

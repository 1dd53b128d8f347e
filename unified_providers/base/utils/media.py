"""Media payload helpers for multimodal content parts.

A part's ``url`` can be a ``data:`` URL, raw base64 (assumed to be of the
part's default MIME type), or an ``http(s)://`` reference. Converters call
:func:`process_media_url` to find out which, then emit the vendor's inline or
by-reference shape.
"""
from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Optional

from ..models import ContentPart

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[^;,]+)?(?:;[^,]*)?,(?P<data>.*)$", re.DOTALL)

# Fallback MIME types per part variant when the payload does not declare one.
DEFAULT_MIME_TYPES = {
    "image": "image/jpeg",
    "video": "video/mp4",
    "audio": "audio/wav",
    "document": "application/pdf",
}


@dataclass
class ProcessedMedia:
    """Normalized view of a media payload.

    Attributes:
        is_base64: True when ``data`` is inline base64.
        data: Base64 payload (prefix stripped) or the remote URL.
        mime_type: Declared or defaulted MIME type.
    """

    is_base64: bool
    data: str
    mime_type: Optional[str] = None

    def as_data_url(self) -> str:
        if not self.is_base64:
            return self.data
        return f"data:{self.mime_type or 'application/octet-stream'};base64,{self.data}"

    def decoded(self) -> bytes:
        """Return the raw bytes of an inline payload."""
        if not self.is_base64:
            raise ValueError("remote media has no inline bytes")
        try:
            return base64.b64decode(self.data, validate=False)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"invalid base64 media payload: {exc}") from exc


def process_media_url(url: str, default_mime: Optional[str] = None) -> ProcessedMedia:
    """Classify a media reference as inline base64 or remote URL."""
    if url.startswith("data:"):
        match = _DATA_URL_RE.match(url)
        if match is None:
            raise ValueError("malformed data URL")
        return ProcessedMedia(is_base64=True, data=match.group("data"), mime_type=match.group("mime") or default_mime)
    if url.startswith(("http://", "https://")):
        return ProcessedMedia(is_base64=False, data=url, mime_type=default_mime)
    return ProcessedMedia(is_base64=True, data=url, mime_type=default_mime)


def process_part(part: ContentPart) -> ProcessedMedia:
    """Process a media part, letting an explicit ``mime_type`` win."""
    if not part.url:
        raise ValueError(f"{part.type} part has no payload")
    processed = process_media_url(part.url, DEFAULT_MIME_TYPES.get(part.type))
    if part.mime_type:
        processed.mime_type = part.mime_type
    return processed


__all__ = ["ProcessedMedia", "process_media_url", "process_part", "DEFAULT_MIME_TYPES"]

"""SupportsAudio Protocol (single-class module)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import AudioRequest, AudioResponse


@runtime_checkable
class SupportsAudio(Protocol):
    """Capability marker for adapters offering text-to-speech."""

    async def generate_audio(self, request: AudioRequest) -> AudioResponse:  # pragma: no cover - interface
        ...

"""Interfaces (Protocols) split into single-class modules.

This package provides one Protocol per file while allowing
``unified_providers.base.interfaces`` to re-export a stable API.
"""

from .provider_adapter import ProviderAdapter
from .supports_embeddings import SupportsEmbeddings
from .supports_images import SupportsImages
from .supports_audio import SupportsAudio
from .token_storage import TokenStorage

__all__ = [
    "ProviderAdapter",
    "SupportsEmbeddings",
    "SupportsImages",
    "SupportsAudio",
    "TokenStorage",
]

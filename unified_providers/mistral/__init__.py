"""
Mistral provider package.

Exports:
- MistralAdapter: chat, SSE streaming and embeddings over raw ``httpx``
"""

from .client import MistralAdapter

__all__ = ["MistralAdapter"]

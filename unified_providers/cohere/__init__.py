"""
Cohere provider package.

Exports:
- CohereAdapter: v1 chat, NDJSON streaming and embeddings over raw ``httpx``
"""

from .client import CohereAdapter

__all__ = ["CohereAdapter"]

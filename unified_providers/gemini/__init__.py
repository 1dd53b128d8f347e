"""
Gemini provider package.

Exports:
- GeminiAdapter: chat, streaming and embeddings over ``google-generativeai``
"""

from .client import GeminiAdapter

__all__ = ["GeminiAdapter"]

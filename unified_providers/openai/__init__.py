"""
OpenAI provider package.

Exports:
- OpenAIAdapter: chat, streaming, embeddings, images and speech over ``AsyncOpenAI``
"""

from .client import OpenAIAdapter

__all__ = ["OpenAIAdapter"]

"""
OpenRouter provider package.

Exports:
- OpenRouterAdapter: chat and streaming over raw ``httpx`` SSE
"""

from .client import OpenRouterAdapter

__all__ = ["OpenRouterAdapter"]

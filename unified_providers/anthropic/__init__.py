"""
Anthropic provider package.

Exports:
- AnthropicAdapter: Claude chat and streaming with API-key or OAuth authentication
"""

from .client import AnthropicAdapter

__all__ = ["AnthropicAdapter"]

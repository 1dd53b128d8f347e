"""
GitHub Copilot provider package.

Exports:
- GitHubCopilotAdapter: chat and streaming over ``AsyncOpenAI`` with OAuth transport auth
"""

from .client import GitHubCopilotAdapter

__all__ = ["GitHubCopilotAdapter"]

"""OpenAI chat-completions wire shapes shared by compatible vendors.

OpenAI, OpenRouter, GitHub Copilot and Mistral all speak the chat-completions
protocol; they differ only in small tables (tool choice, finish reasons) and
in whether tool-result messages must repeat the function name.
"""

from .converters import (
    OPENAI_TOOL_CHOICES,
    ToolChoiceTable,
    build_chat_payload,
    to_openai_content,
    to_openai_messages,
    to_openai_response_format,
    to_openai_tool_choice,
    to_openai_tools,
)
from .normalizers import (
    OPENAI_FINISH_REASONS,
    from_embedding_response,
    from_openai_response,
    openai_model_info,
    parse_openai_usage,
)
from .base import BaseOpenAIStyleAdapter

__all__ = [
    "OPENAI_TOOL_CHOICES",
    "ToolChoiceTable",
    "OPENAI_FINISH_REASONS",
    "build_chat_payload",
    "to_openai_content",
    "to_openai_messages",
    "to_openai_response_format",
    "to_openai_tool_choice",
    "to_openai_tools",
    "from_openai_response",
    "from_embedding_response",
    "openai_model_info",
    "parse_openai_usage",
    "BaseOpenAIStyleAdapter",
]

"""Token usage counts attached to responses and terminal stream chunks."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class TokenUsage:
    """Token accounting for one completion.

    ``total_tokens`` equals ``prompt_tokens + completion_tokens``; cached and
    reasoning counts are separate cost axes and do not contribute to it.
    """

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    cached_tokens: Optional[int] = None
    reasoning_tokens: Optional[int] = None

    @classmethod
    def of(
        cls,
        prompt: Optional[int],
        completion: Optional[int],
        *,
        cached: Optional[int] = None,
        reasoning: Optional[int] = None,
    ) -> "TokenUsage":
        p = int(prompt or 0)
        c = int(completion or 0)
        return cls(
            prompt_tokens=p,
            completion_tokens=c,
            total_tokens=p + c,
            cached_tokens=cached,
            reasoning_tokens=reasoning,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


__all__ = ["TokenUsage"]

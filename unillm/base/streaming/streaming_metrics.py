"""Streaming metrics data structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Collected metrics for a single streaming call.

    Attributes:
        emitted: Deltas that carried text or tool calls.
        deltas: All deltas returned, including empty ones.
        tool_calls: Tool calls emitted over the stream.
        time_to_first_token_ms: Latency until the first non-empty delta.
        total_duration_ms: Time from stream open to finalization.
        prompt_tokens / completion_tokens / total_tokens: Vendor counters
            when the stream reported them.
    """

    emitted: int = 0
    deltas: int = 0
    tool_calls: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    @property
    def tokens(self) -> Optional[Dict[str, Any]]:
        if self.prompt_tokens is None and self.completion_tokens is None and self.total_tokens is None:
            return None
        return {"prompt": self.prompt_tokens, "completion": self.completion_tokens, "total": self.total_tokens}


def apply_token_usage(metrics: StreamMetrics, *, prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> None:
    """Populate token usage fields; ``total`` is derived when omitted."""
    metrics.prompt_tokens = prompt
    metrics.completion_tokens = completion
    if total is None and prompt is not None and completion is not None:
        total = prompt + completion
    metrics.total_tokens = total


__all__ = ["StreamMetrics", "apply_token_usage"]

"""Assistant message produced by a provider (whole response or a delta)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Tuple

from .tool_call import ToolCall


@dataclass(frozen=True)
class OutputMessage:
    """Assistant output.

    For a streaming delta ``content`` holds only the text produced since the
    previous delta and ``tool_calls`` only the calls that just completed.
    """

    role: Literal["assistant"] = "assistant"
    content: str = ""
    tool_calls: Tuple[ToolCall, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "content": self.content,
            "tool_calls": [c.to_dict() for c in self.tool_calls],
        }


__all__ = ["OutputMessage"]

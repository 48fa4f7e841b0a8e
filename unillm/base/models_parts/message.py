"""
Canonical input message.

Roles are limited to ``user``, ``assistant`` and ``tool``; the system prompt is
a request-level field. Assistant turns that invoke tools carry ``tool_calls``;
tool turns carry ``tool_results`` answering the preceding assistant turn.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Literal, Tuple

from .content_part import ContentPart, TextPart
from .tool_call import ToolCall
from .tool_result import ToolResult


Role = Literal["user", "assistant", "tool"]


@dataclass(frozen=True)
class InputMessage:
    """One conversation turn sent to a provider.

    Attributes:
        role: Speaker of the turn.
        content: Ordered content parts (text and images).
        tool_calls: Calls issued by the assistant on this turn.
        tool_results: Results delivered on a tool turn.
    """

    role: Role
    content: Tuple[ContentPart, ...] = ()
    tool_calls: Tuple[ToolCall, ...] = ()
    tool_results: Tuple[ToolResult, ...] = ()

    @classmethod
    def user(cls, text: str, *parts: ContentPart) -> "InputMessage":
        return cls(role="user", content=(TextPart(text), *parts))

    @classmethod
    def assistant(cls, text: str = "", tool_calls: Iterable[ToolCall] = ()) -> "InputMessage":
        content: Tuple[ContentPart, ...] = (TextPart(text),) if text else ()
        return cls(role="assistant", content=content, tool_calls=tuple(tool_calls))

    @classmethod
    def tool(cls, results: Iterable[ToolResult]) -> "InputMessage":
        return cls(role="tool", tool_results=tuple(results))

    def text(self, sep: str = "") -> str:
        """Concatenate the text parts of the message in order."""
        return sep.join(p.text for p in self.content if isinstance(p, TextPart))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "content": [p.to_dict() for p in self.content],
            "tool_calls": [c.to_dict() for c in self.tool_calls],
            "tool_results": [r.to_dict() for r in self.tool_results],
        }


__all__ = ["InputMessage", "Role"]

"""
Provider-agnostic chat completion response.

The same type describes a complete non-streaming response and a single
streaming delta. Convenience accessors read the first choice, which is the
only one the providers in this package request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .choice import Choice
from .finish_reason import FinishReason
from .output_message import OutputMessage
from .tool_call import ToolCall
from .usage import Usage


@dataclass(frozen=True)
class ChatCompletionResponse:
    """Normalized response or delta.

    Attributes:
        id: Vendor response id when available.
        choices: Completion alternatives; empty for empty stream events.
        usage: Vendor-reported counters (zero-filled).
    """

    id: Optional[str] = None
    choices: Tuple[Choice, ...] = ()
    usage: Usage = field(default_factory=Usage)

    @classmethod
    def single(
        cls,
        content: str = "",
        tool_calls: Tuple[ToolCall, ...] = (),
        finish_reason: Optional[FinishReason] = None,
        *,
        id: Optional[str] = None,
        usage: Optional[Usage] = None,
    ) -> "ChatCompletionResponse":
        """Build a one-choice response."""
        choice = Choice(
            index=0,
            message=OutputMessage(content=content, tool_calls=tuple(tool_calls)),
            finish_reason=finish_reason,
        )
        return cls(id=id, choices=(choice,), usage=usage or Usage())

    @property
    def message(self) -> OutputMessage:
        return self.choices[0].message if self.choices else OutputMessage()

    @property
    def content(self) -> str:
        return "".join(c.message.content for c in self.choices)

    @property
    def tool_calls(self) -> Tuple[ToolCall, ...]:
        return tuple(call for c in self.choices for call in c.message.tool_calls)

    @property
    def finish_reason(self) -> Optional[FinishReason]:
        for c in self.choices:
            if c.finish_reason is not None:
                return c.finish_reason
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "choices": [c.to_dict() for c in self.choices],
            "usage": self.usage.to_dict(),
        }


__all__ = ["ChatCompletionResponse"]

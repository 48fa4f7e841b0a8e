"""
Provider-agnostic chat completion request.

Notes:
    ``temperature`` is optional so that "unset" and an explicit ``0.0`` stay
    distinguishable. Bindings that need a non-zero value when unset substitute
    a named default from ``unillm.config.defaults``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .message import InputMessage
from .tool import Tool


@dataclass(frozen=True)
class ChatCompletionRequest:
    """Canonical request accepted by every provider.

    Attributes:
        model: Vendor model identifier; checked against the provider allow-list.
        messages: Ordered conversation turns.
        system_prompt: Optional system instruction.
        tools: Functions the model may call.
        temperature: Sampling temperature or ``None`` when unset.
        top_p: Nucleus sampling value or ``None`` for the provider default.
        max_tokens: Completion token limit or ``None``.
        json_mode: Ask the vendor for a JSON object response.
    """

    model: str
    messages: Tuple[InputMessage, ...]
    system_prompt: Optional[str] = None
    tools: Tuple[Tool, ...] = ()
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None
    json_mode: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "system_prompt": self.system_prompt,
            "tools": [t.to_dict() for t in self.tools],
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_tokens": self.max_tokens,
            "json_mode": self.json_mode,
        }


__all__ = ["ChatCompletionRequest"]

"""Single completion alternative inside a response."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .finish_reason import FinishReason
from .output_message import OutputMessage


@dataclass(frozen=True)
class Choice:
    index: int = 0
    message: OutputMessage = field(default_factory=OutputMessage)
    finish_reason: Optional[FinishReason] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "message": self.message.to_dict(),
            "finish_reason": self.finish_reason.value if self.finish_reason else None,
        }


__all__ = ["Choice"]

"""Result of executing a tool call, sent back to the model on a tool turn."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call.

    Attributes:
        tool_call_id: Id of the ``ToolCall`` this result answers.
        function_name: Name of the executed function (Gemini and Ollama key
            results by name rather than id).
        result: String payload returned to the model.
        is_error: Whether the tool failed; forwarded where the vendor supports it.
    """

    tool_call_id: str
    function_name: str
    result: str
    is_error: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ToolResult"]

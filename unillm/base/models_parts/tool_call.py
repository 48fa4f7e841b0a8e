"""
Tool call issued by the assistant.

``arguments`` is JSON text. While a stream is in flight the normalizers grow it
fragment by fragment; a ``ToolCall`` value is only constructed once the text is
complete, so consumers can always parse it.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class ToolCall:
    """A complete function invocation requested by the model."""

    id: str
    function_name: str
    arguments: str
    type: str = "function"

    def parsed_arguments(self) -> Dict[str, Any]:
        """Decode ``arguments`` into a mapping (empty text decodes to ``{}``)."""
        if not self.arguments.strip():
            return {}
        return json.loads(self.arguments)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ToolCall"]

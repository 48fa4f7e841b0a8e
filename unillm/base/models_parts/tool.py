"""Tool (function) declaration offered to the model for a single request."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class Tool:
    """A callable function the model may request.

    Attributes:
        name: Function name the model refers to in tool calls.
        description: Natural language description shown to the model.
        parameters: JSON-Schema-like mapping with ``type``, ``properties`` and
            ``required`` keys.
    """

    name: str
    description: str = ""
    parameters: Mapping[str, Any] = field(default_factory=dict)
    type: str = "function"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "parameters": dict(self.parameters),
        }


__all__ = ["Tool"]

"""
Tool-call argument helpers.

Vendors hand back arguments as JSON text (OpenAI), decoded mappings
(Anthropic, Ollama) or protobuf map composites (Gemini). Everything is reduced
to JSON text with :func:`dump_arguments` so the streaming and non-streaming
paths of a provider produce identical ``ToolCall.arguments``.
"""
from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any


def to_plain(value: Any) -> Any:
    """Recursively convert mapping/sequence containers into ``dict``/``list``."""
    if isinstance(value, Mapping):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [to_plain(v) for v in value]
    return value


def dump_arguments(value: Any) -> str:
    """Serialize decoded arguments to JSON text; ``None`` becomes ``{}``."""
    if value is None:
        return "{}"
    if isinstance(value, str):
        return value
    return json.dumps(to_plain(value), ensure_ascii=False)


def is_json_object(text: str) -> bool:
    """Return True when ``text`` parses as a JSON object."""
    try:
        return isinstance(json.loads(text), dict)
    except ValueError:
        return False


__all__ = ["to_plain", "dump_arguments", "is_json_object"]

"""
Reassembly of tool calls whose arguments arrive as JSON fragments.

State is a mapping of call id to an in-progress buffer plus a "current"
pointer. Fragments that omit the id continue the current buffer. After every
append the buffered text is parsed; once it is a JSON object the call is
complete, leaves the buffer and is returned to the caller.

Completion by "parses as a JSON object" assumes arguments are always objects.
A well-formed object cannot be followed by further valid fragments, so the
only leftovers tolerated after completion are whitespace fragments.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..errors import ErrorCode, ProviderError
from ..models import ToolCall
from ..utils import is_json_object


@dataclass
class _PendingCall:
    id: str
    name: str = ""
    arguments: str = ""


class ToolCallBuffer:
    """Per-stream buffer of partially received tool calls."""

    def __init__(self, provider: str, model: Optional[str] = None) -> None:
        self._provider = provider
        self._model = model
        self._pending: Dict[str, _PendingCall] = {}
        self._current: Optional[str] = None
        self._completed: set[str] = set()

    def _protocol_error(self, message: str) -> ProviderError:
        return ProviderError(
            code=ErrorCode.PROTOCOL,
            message=message,
            provider=self._provider,
            model=self._model,
        )

    def feed(self, call_id: Optional[str], name: Optional[str], fragment: Optional[str]) -> Optional[ToolCall]:
        """Consume one fragment; return the call if it just became complete.

        Raises:
            ProviderError: ``PROTOCOL`` for a non-whitespace fragment that has
                no open buffer to continue, or that targets a completed call.
        """
        fragment = fragment or ""
        if call_id and call_id in self._completed and call_id not in self._pending:
            if fragment.strip() or name:
                raise self._protocol_error(f"fragment for already completed tool call {call_id!r}")
            return None
        if call_id:
            pending = self._pending.get(call_id)
            if pending is None:
                pending = self._pending[call_id] = _PendingCall(id=call_id)
            self._current = call_id
        elif self._current is not None:
            pending = self._pending[self._current]
        else:
            if fragment.strip() or name:
                raise self._protocol_error("tool-call fragment received with no open tool call")
            return None
        if name:
            pending.name = name
        if not fragment:
            return None
        pending.arguments += fragment
        if not is_json_object(pending.arguments):
            return None
        del self._pending[pending.id]
        self._completed.add(pending.id)
        self._current = None
        return ToolCall(id=pending.id, function_name=pending.name, arguments=pending.arguments)

    def pending(self) -> List[str]:
        """Ids of calls that were opened but never completed."""
        return list(self._pending)

    def ensure_drained(self) -> None:
        """Raise a protocol error when incomplete calls remain."""
        if not self._pending:
            return
        details = ", ".join(f"{p.id}({p.name or '?'}): {p.arguments!r}" for p in self._pending.values())
        raise self._protocol_error(f"tool call arguments never became valid JSON: {details}")


__all__ = ["ToolCallBuffer"]

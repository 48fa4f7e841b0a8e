"""StreamHandler Protocol (single-class module).

Callbacks driven by :func:`unillm.base.streaming.consume_stream`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import OutputMessage, ToolCall


@runtime_checkable
class StreamHandler(Protocol):
    """Receiver of streaming events.

    ``on_start`` fires once before the first delta is requested; nothing fires
    after ``on_complete`` or ``on_error``.
    """

    def on_start(self) -> None:
        ...

    def on_token(self, token: str) -> None:
        ...

    def on_tool_call(self, tool_call: ToolCall) -> None:
        ...

    def on_complete(self, message: OutputMessage) -> None:
        ...

    def on_error(self, error: Exception) -> None:
        ...

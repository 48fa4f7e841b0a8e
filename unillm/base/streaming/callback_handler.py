"""StreamHandler built from optional plain callables."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..models import OutputMessage, ToolCall


@dataclass
class CallbackStreamHandler:
    """Adapts keyword callables to the ``StreamHandler`` protocol.

    Unset callbacks are no-ops, e.g.
    ``CallbackStreamHandler(on_token=lambda t: print(t, end=""))``.
    """

    start: Optional[Callable[[], None]] = None
    token: Optional[Callable[[str], None]] = None
    tool_call: Optional[Callable[[ToolCall], None]] = None
    complete: Optional[Callable[[OutputMessage], None]] = None
    error: Optional[Callable[[Exception], None]] = None

    def on_start(self) -> None:
        if self.start is not None:
            self.start()

    def on_token(self, token: str) -> None:
        if self.token is not None:
            self.token(token)

    def on_tool_call(self, tool_call: ToolCall) -> None:
        if self.tool_call is not None:
            self.tool_call(tool_call)

    def on_complete(self, message: OutputMessage) -> None:
        if self.complete is not None:
            self.complete(message)

    def on_error(self, error: Exception) -> None:
        if self.error is not None:
            self.error(error)


__all__ = ["CallbackStreamHandler"]

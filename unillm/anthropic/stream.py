"""
Anthropic Messages stream normalizer.

The SDK's ``MessageStream`` yields the raw server events plus convenience
events it synthesizes from them (``text``, ``input_json``, ``citation``,
``thinking``, ``signature``). Only raw events are translated; the synthesized
ones become empty deltas so no text is reported twice.

Tool calls are taken whole from ``content_block_stop``, where the SDK exposes
the fully accumulated ``tool_use`` block, so Claude calls bypass the fragment
buffer. The terminating delta is built from ``message_delta`` (stop reason and
output usage).
"""
from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Any, Optional

from ..base.cancellation import CancellationToken
from ..base.errors import EndOfStream
from ..base.models import ChatCompletionResponse
from ..base.streaming import NormalizedStream
from .helpers import FINISH_REASONS, PROVIDER, tool_call_from_block, usage_from


class AnthropicChatStream(NormalizedStream):
    """Normalizes events from ``client.messages.stream(...)``.

    Parameters:
        stream_manager: The SDK ``MessageStreamManager`` (a context manager).
            It is entered here, which sends the request; failures propagate to
            the caller before any delta exists.
    """

    def __init__(
        self,
        stream_manager: Any,
        *,
        model: str,
        logger: logging.Logger,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        self._stack = ExitStack()
        try:
            native = self._stack.enter_context(stream_manager)
        except BaseException:
            self._stack.close()
            raise
        super().__init__(
            provider=PROVIDER,
            model=model,
            finish_reasons=FINISH_REASONS,
            logger=logger,
            cancellation_token=cancellation_token,
        )
        self._events = iter(native)
        self._message_id: Optional[str] = None
        self._input_tokens: Optional[int] = None
        self._arm()

    def _next_delta(self) -> ChatCompletionResponse:
        try:
            event = next(self._events)
        except StopIteration:
            raise EndOfStream() from None
        kind = getattr(event, "type", None)
        if kind == "message_start":
            message = getattr(event, "message", None)
            self._message_id = getattr(message, "id", None)
            usage = getattr(message, "usage", None)
            self._input_tokens = getattr(usage, "input_tokens", None)
            return self._emit(response_id=self._message_id)
        if kind == "content_block_delta":
            delta = getattr(event, "delta", None)
            if getattr(delta, "type", None) == "text_delta":
                return self._emit(delta.text, response_id=self._message_id)
            # input_json_delta: the block is taken whole at content_block_stop
            return self._emit(response_id=self._message_id)
        if kind == "content_block_stop":
            block = getattr(event, "content_block", None)
            if getattr(block, "type", None) == "tool_use":
                return self._emit(tool_calls=(tool_call_from_block(block),), response_id=self._message_id)
            return self._emit(response_id=self._message_id)
        if kind == "message_delta":
            stop_reason = getattr(getattr(event, "delta", None), "stop_reason", None)
            return self._emit(
                raw_finish=stop_reason,
                response_id=self._message_id,
                usage=usage_from(getattr(event, "usage", None), input_tokens=self._input_tokens),
            )
        return self._emit(response_id=self._message_id)

    def _close_native(self) -> None:
        self._stack.close()


__all__ = ["AnthropicChatStream"]

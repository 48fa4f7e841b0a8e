"""
OpenAI Chat Completions stream normalizer.

Each SDK chunk becomes one delta. Text arrives as raw increments; tool-call
arguments arrive as JSON fragments where only the first fragment of a call
carries its id, so fragments go through the shared ``ToolCallBuffer`` and a
call is emitted in the delta whose fragment completed its JSON object.
"""
from __future__ import annotations

import logging
import typing as _t
from typing import Optional

from ..base.cancellation import CancellationToken
from ..base.errors import EndOfStream
from ..base.models import ChatCompletionResponse, ToolCall
from ..base.streaming import NormalizedStream
from .helpers import FINISH_REASONS, PROVIDER, usage_from


class OpenAIChatStream(NormalizedStream):
    """Normalizes an ``openai.Stream`` of ``ChatCompletionChunk`` objects."""

    def __init__(
        self,
        sdk_stream: _t.Any,
        *,
        model: str,
        logger: logging.Logger,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        super().__init__(
            provider=PROVIDER,
            model=model,
            finish_reasons=FINISH_REASONS,
            logger=logger,
            cancellation_token=cancellation_token,
        )
        self._sdk_stream = sdk_stream
        self._events = iter(sdk_stream)
        self._arm()

    def _next_delta(self) -> ChatCompletionResponse:
        try:
            chunk = next(self._events)
        except StopIteration:
            raise EndOfStream() from None
        usage = usage_from(chunk) if getattr(chunk, "usage", None) is not None else None
        choices = getattr(chunk, "choices", None) or ()
        if not choices:
            return self._emit(response_id=getattr(chunk, "id", None), usage=usage)
        choice = choices[0]
        delta = getattr(choice, "delta", None)
        completed: list[ToolCall] = []
        for fragment in (getattr(delta, "tool_calls", None) or ()):
            function = getattr(fragment, "function", None)
            call = self._tools.feed(
                getattr(fragment, "id", None),
                getattr(function, "name", None),
                getattr(function, "arguments", None),
            )
            if call is not None:
                completed.append(call)
        return self._emit(
            getattr(delta, "content", None),
            completed,
            getattr(choice, "finish_reason", None),
            response_id=getattr(chunk, "id", None),
            usage=usage,
        )

    def _close_native(self) -> None:
        close = getattr(self._sdk_stream, "close", None)
        if callable(close):
            close()


__all__ = ["OpenAIChatStream"]

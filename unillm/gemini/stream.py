"""
Gemini stream normalizer.

``GenerativeModel.generate_content(..., stream=True)`` returns a response
object that yields ``GenerateContentResponse`` chunks. Each chunk becomes one
delta: text parts are increments, function-call parts arrive whole (with no
id) and are numbered ``call_<n>``. A chunk without candidates is an empty
delta. The finish reason is read from the first candidate by enum name.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from ..base.cancellation import CancellationToken
from ..base.errors import EndOfStream
from ..base.models import ChatCompletionResponse
from ..base.streaming import NormalizedStream
from .helpers import (
    FINISH_REASONS,
    PROVIDER,
    ToolCallNumbering,
    admit_calls,
    candidate_parts,
    finish_reason_name,
    usage_from,
)


class GeminiChatStream(NormalizedStream):
    """Normalizes a streaming ``GenerateContentResponse``."""

    def __init__(
        self,
        response: Any,
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
        self._response = response
        self._events = iter(response)
        self._numbering = ToolCallNumbering()
        self._arm()

    def _next_delta(self) -> ChatCompletionResponse:
        try:
            chunk = next(self._events)
        except StopIteration:
            raise EndOfStream() from None
        usage = usage_from(getattr(chunk, "usage_metadata", None))
        candidates = getattr(chunk, "candidates", None) or ()
        if not candidates:
            return self._emit(usage=usage)
        candidate = candidates[0]
        text, raw_calls = candidate_parts(candidate)
        return self._emit(
            text,
            admit_calls(self._numbering, raw_calls),
            finish_reason_name(getattr(candidate, "finish_reason", None)),
            usage=usage,
        )

    def _close_native(self) -> None:
        # the SDK response has no close(); cancel the underlying call when it
        # exposes one (gRPC) and drop the iterator either way
        inner = getattr(self._response, "_iterator", None)
        cancel = getattr(inner, "cancel", None)
        if callable(cancel):
            cancel()
        self._events = iter(())


__all__ = ["GeminiChatStream"]

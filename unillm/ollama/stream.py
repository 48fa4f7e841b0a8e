"""
Ollama stream normalizer.

The transport pushes decoded NDJSON chunks from a worker thread; the
:class:`PushStreamBridge` turns them back into one-per-``receive_next`` pulls.
Text arrives as increments, tool calls arrive whole on a chunk's message, and
the finish reason is only read from the ``done`` chunk.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..base.cancellation import CancellationToken
from ..base.models import ChatCompletionResponse
from ..base.streaming import NormalizedStream, PushStreamBridge
from .helpers import FINISH_REASONS, PROVIDER, ToolCallCounter, parse_chunk
from .transport import OllamaTransport


class OllamaChatStream(NormalizedStream):
    """Pull stream over a push-style ``OllamaTransport.chat`` call."""

    def __init__(
        self,
        transport: OllamaTransport,
        payload: Mapping[str, Any],
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
        self._counter = ToolCallCounter()
        self._bridge = PushStreamBridge(
            lambda emit, token: transport.chat(payload, emit, token),
            token=self._token,
            name=f"unillm-ollama-{model}",
        )
        self._arm()
        self._bridge.start()

    def _next_delta(self) -> ChatCompletionResponse:
        chunk = self._bridge.get()
        parts = parse_chunk(chunk, self._counter)
        return self._emit(parts.text, parts.tool_calls, parts.raw_finish, usage=parts.usage)

    def _close_native(self) -> None:
        self._bridge.close()


__all__ = ["OllamaChatStream"]

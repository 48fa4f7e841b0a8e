"""
Provider-agnostic streaming consumer.

Pumps a normalized stream into :class:`StreamHandler` callbacks:

1. ``on_start`` once, before the first ``receive_next``.
2. Each non-empty delta text goes to ``on_token`` and a local accumulator.
3. Tool calls are appended to a local list in arrival order.
4. ``finish_reason == tool_calls``: ``on_tool_call`` with the last appended call.
5. Any finish reason: ``on_complete`` with the accumulated ``OutputMessage``,
   then stop pumping.
6. ``EndOfStream`` without a finish reason stops quietly; any other error goes
   to ``on_error`` and stops.

The stream is always closed on exit.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from ..cancellation import CancellationToken
from ..errors import EndOfStream, ErrorCode, ProviderError
from ..interfaces import ChatCompletionStream, LLMProvider, StreamHandler
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ChatCompletionRequest, FinishReason, OutputMessage, ToolCall

_logger = get_logger("unillm.stream")


def consume_stream(stream: ChatCompletionStream, handler: StreamHandler) -> Optional[OutputMessage]:
    """Drain ``stream`` into ``handler``.

    Returns:
        The final ``OutputMessage`` passed to ``on_complete``, or ``None`` when
        the stream failed or ended without a finish reason. Errors are
        reported through ``on_error`` only.
    """
    text: List[str] = []
    tool_calls: List[ToolCall] = []
    try:
        handler.on_start()
        while True:
            try:
                delta = stream.receive_next()
            except EndOfStream:
                return None
            except Exception as exc:  # reported through the handler
                handler.on_error(exc)
                return None
            if delta.content:
                handler.on_token(delta.content)
                text.append(delta.content)
            tool_calls.extend(delta.tool_calls)
            finish = delta.finish_reason
            if finish is FinishReason.TOOL_CALLS:
                if not tool_calls:
                    handler.on_error(
                        ProviderError(
                            code=ErrorCode.PROTOCOL,
                            message="finish reason tool_calls without any tool call",
                            provider=getattr(stream, "provider", "unknown"),
                            model=getattr(stream, "model", None),
                        )
                    )
                    return None
                handler.on_tool_call(tool_calls[-1])
            if finish is not None:
                message = OutputMessage(content="".join(text), tool_calls=tuple(tool_calls))
                handler.on_complete(message)
                return message
    finally:
        stream.close()


def stream_chat_completion(
    provider: LLMProvider,
    request: ChatCompletionRequest,
    handler: StreamHandler,
    *,
    cancellation_token: Optional[CancellationToken] = None,
) -> Optional[OutputMessage]:
    """Open a stream on ``provider`` and drain it into ``handler``.

    A failure to open the stream is reported through ``on_error`` without a
    preceding ``on_start``.
    """
    try:
        stream = provider.create_chat_completion_stream(request, cancellation_token=cancellation_token)
    except Exception as exc:  # reported through the handler
        normalized_log_event(
            _logger,
            "stream.open.error",
            LogContext(provider=provider.provider_name, model=request.model),
            phase="start",
            error_code=exc.code.value if isinstance(exc, ProviderError) else None,
            emitted=False,
            level=logging.WARNING,
            error=str(exc),
        )
        handler.on_error(exc)
        return None
    return consume_stream(stream, handler)


__all__ = ["consume_stream", "stream_chat_completion"]

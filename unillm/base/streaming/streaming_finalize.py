"""Terminal logging for normalized streams."""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import ErrorCode, ProviderError
from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def log_stream_end(
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    *,
    finish_reason: Optional[str] = None,
    error: Optional[ProviderError] = None,
) -> None:
    """Emit ``stream.end``, ``stream.cancelled`` or ``stream.error`` with metrics."""
    if error is None:
        event, level = "stream.end", logging.INFO
    elif error.code is ErrorCode.CANCELLED:
        event, level = "stream.cancelled", logging.INFO
    else:
        event, level = "stream.error", logging.WARNING
    normalized_log_event(
        logger,
        event,
        ctx,
        phase="finalize",
        error_code=error.code.value if error is not None else None,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        level=level,
        emitted_count=metrics.emitted,
        delta_count=metrics.deltas,
        tool_call_count=metrics.tool_calls,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        finish_reason=finish_reason,
        error=error.message if error is not None else None,
    )


__all__ = ["log_stream_end"]

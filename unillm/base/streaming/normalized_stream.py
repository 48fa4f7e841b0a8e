"""
Base class for per-provider stream normalizers.

``NormalizedStream`` implements the canonical stream contract on top of a
single vendor event source:

* ``receive_next()`` pulls exactly one vendor event and returns one delta
  (possibly empty). After the delta carrying a finish reason it raises
  :class:`EndOfStream`. Failures are raised as :class:`ProviderError`.
* ``close()`` is idempotent, may run concurrently with an in-flight
  ``receive_next()`` and releases the vendor resource exactly once.

Subclasses implement ``_next_delta`` (read one vendor event and translate it
with ``_emit``) and ``_close_native``. Shared state available to them:

* ``self._text``: :class:`TextAccumulator` for the turn's text.
* ``self._tools``: :class:`ToolCallBuffer` for fragmented tool calls.
* ``self._token``: a child :class:`CancellationToken`; cancelling the caller's
  token or calling ``close()`` cancels it and releases the vendor resource. Once
  the resource is released the token is detached from the caller's token.

Instances are single-consumer: concurrent ``receive_next`` calls on the same
stream are not supported.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, Iterable, Optional

from ..cancellation import CancellationToken, CancelledError
from ..errors import EndOfStream, ErrorCode, ProviderError, to_provider_error
from ..logging import LogContext, log_event, normalized_log_event
from ..models import ChatCompletionResponse, ToolCall, Usage
from .finish_reasons import FinishReasonTable
from .streaming_finalize import log_stream_end
from .streaming_metrics import StreamMetrics, apply_token_usage
from .text_accumulator import TextAccumulator
from .tool_call_buffer import ToolCallBuffer


class NormalizedStream:
    """Canonical delta stream over one vendor event source."""

    def __init__(
        self,
        *,
        provider: str,
        model: str,
        finish_reasons: FinishReasonTable,
        logger: logging.Logger,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        self.provider = provider
        self.model = model
        self.metrics = StreamMetrics()
        self._finish_reasons = finish_reasons
        self._logger = logger
        self._ctx = LogContext(provider=provider, model=model)
        self._text = TextAccumulator()
        self._tools = ToolCallBuffer(provider, model)
        self._tool_call_count = 0
        self._lock = threading.Lock()
        self._closed = False
        self._released = False
        self._finalized = False
        self._terminated = False
        self._exhausted = False
        self._error: Optional[ProviderError] = None
        self._finish_value: Optional[str] = None
        self._t0 = time.perf_counter()
        parent = cancellation_token
        self._token = parent.child() if parent is not None else CancellationToken()
        normalized_log_event(self._logger, "stream.start", self._ctx, phase="start", emitted=False)

    def _arm(self) -> None:
        """Release the vendor resource as soon as the token is cancelled.

        Called by subclasses once their vendor resource exists.
        """
        self._token.register(self._release)

    # ------------------------------------------------------------------ hooks
    def _next_delta(self) -> ChatCompletionResponse:
        """Read one vendor event and translate it; raise ``EndOfStream`` when exhausted."""
        raise NotImplementedError

    def _close_native(self) -> None:
        """Release the underlying vendor stream/connection."""

    # ------------------------------------------------------------ translation
    def _emit(
        self,
        text: Optional[str] = None,
        tool_calls: Iterable[ToolCall] = (),
        raw_finish: Any = None,
        *,
        response_id: Optional[str] = None,
        usage: Optional[Usage] = None,
    ) -> ChatCompletionResponse:
        """Build a delta from one vendor event.

        ``raw_finish`` is the vendor finish value (``None`` for events that
        carry none); it is resolved after this event's tool calls are counted
        so a plain stop with tool calls becomes ``tool_calls``.
        """
        calls = tuple(tool_calls)
        self._tool_call_count += len(calls)
        finish = None
        if raw_finish is not None:
            finish = self._finish_reasons.resolve(
                raw_finish, has_tool_calls=self._tool_call_count > 0, model=self.model
            )
        return ChatCompletionResponse.single(
            self._text.push(text),
            calls,
            finish,
            id=response_id,
            usage=usage,
        )

    # --------------------------------------------------------------- contract
    def receive_next(self) -> ChatCompletionResponse:
        """Return the next delta.

        Raises:
            EndOfStream: after the terminating delta or when the vendor stream
                ended.
            ProviderError: transport/vendor failures, protocol violations, or
                ``CANCELLED`` after cancellation or ``close()``.
        """
        if self._error is not None:
            raise self._error
        if self._terminated or self._exhausted:
            self._finalize()
            raise EndOfStream()
        if self._token.cancelled:
            raise self._fail(self._cancelled_error())
        try:
            delta = self._next_delta()
        except EndOfStream:
            if self._token.cancelled:
                raise self._fail(self._cancelled_error()) from None
            self._exhausted = True
            try:
                self._tools.ensure_drained()
            except ProviderError as err:
                raise self._fail(err) from None
            self._finalize()
            raise
        except CancelledError:
            raise self._fail(self._cancelled_error()) from None
        except ProviderError as err:
            raise self._fail(err) from None
        except Exception as exc:
            if self._token.cancelled:
                raise self._fail(self._cancelled_error()) from exc
            raise self._fail(to_provider_error(exc, provider=self.provider, model=self.model)) from exc
        return self._record(delta)

    def close(self) -> None:
        """Stop the stream and release vendor resources (idempotent)."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        if self._terminated or self._exhausted:
            self._finalize()
        elif self._error is None:
            self._fail(self._cancelled_error())
        self._token.cancel("stream closed")
        self._release()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def accumulated_text(self) -> str:
        return self._text.accumulated

    def __iter__(self) -> "NormalizedStream":
        return self

    def __next__(self) -> ChatCompletionResponse:
        try:
            return self.receive_next()
        except EndOfStream:
            raise StopIteration from None

    def __enter__(self) -> "NormalizedStream":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -------------------------------------------------------------- internals
    def _record(self, delta: ChatCompletionResponse) -> ChatCompletionResponse:
        m = self.metrics
        m.deltas += 1
        if delta.content or delta.tool_calls:
            m.emitted += 1
            m.tool_calls += len(delta.tool_calls)
            if m.time_to_first_token_ms is None:
                m.time_to_first_token_ms = (time.perf_counter() - self._t0) * 1000.0
        if delta.usage.total_tokens:
            apply_token_usage(
                m,
                prompt=delta.usage.prompt_tokens,
                completion=delta.usage.completion_tokens,
                total=delta.usage.total_tokens,
            )
        if delta.id and self._ctx.response_id is None:
            self._ctx.response_id = delta.id
        finish = delta.finish_reason
        if finish is not None:
            try:
                self._tools.ensure_drained()
            except ProviderError as err:
                raise self._fail(err) from None
            self._terminated = True
            self._finish_value = finish.value
        return delta

    def _cancelled_error(self) -> ProviderError:
        return ProviderError(
            code=ErrorCode.CANCELLED,
            message=self._token.reason or "stream cancelled",
            provider=self.provider,
            model=self.model,
        )

    def _fail(self, error: ProviderError) -> ProviderError:
        """Record the first failure, log it once and release resources."""
        with self._lock:
            if self._error is not None:
                return self._error
            self._error = error
            self._finalized = True
        self.metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        log_stream_end(self._logger, self._ctx, self.metrics, error=error)
        self._release()
        return error

    def _finalize(self) -> None:
        with self._lock:
            if self._finalized:
                return
            self._finalized = True
        self.metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        log_stream_end(self._logger, self._ctx, self.metrics, finish_reason=self._finish_value)
        self._release()

    def _release(self) -> None:
        with self._lock:
            if self._released:
                return
            self._released = True
        try:
            self._close_native()
        except Exception as exc:  # cleanup must not mask the stream outcome
            log_event(
                self._logger,
                "stream.close.error",
                self._ctx,
                level=logging.WARNING,
                error=f"{exc.__class__.__name__}: {exc}",
            )
        finally:
            # after the native close: push transports cancel this token to stop their producer
            self._token.detach()


__all__ = ["NormalizedStream"]

"""
Push-to-pull bridge for callback-driven transports.

Some transports deliver events by invoking a callback until the response is
finished. ``PushStreamBridge`` runs such a producer on one daemon worker
thread and hands events to the consumer through a bounded ``queue.Queue``.

Backpressure: the producer blocks while the queue is full, re-checking the
cancellation token between attempts, so events are never dropped or
reordered.

Cancellation: the same token is seen by both sides. On cancel the producer's
next ``emit`` raises :class:`CancelledError` (aborting the transport loop),
and a wake marker is posted without blocking so a consumer blocked in
``get()`` returns promptly. If the queue is full at that moment the consumer
is not blocked and sees the cancellation on its next ``get()``.
"""
from __future__ import annotations

import queue
import threading
from typing import Any, Callable, Optional

from ...config.defaults import STREAM_BRIDGE_PUT_POLL_SECONDS, STREAM_BRIDGE_QUEUE_CAPACITY
from ..cancellation import CancellationToken, CancelledError
from ..errors import EndOfStream

Emit = Callable[[Any], None]
Producer = Callable[[Emit, CancellationToken], None]

_EVENT = "event"
_ERROR = "error"
_DONE = "done"
_WAKE = "wake"


class PushStreamBridge:
    """Bounded queue plus one worker thread bridging a push producer.

    Parameters:
        producer: Callable invoked on the worker thread as
            ``producer(emit, token)``; it calls ``emit(event)`` for every
            event and returns when the transport is exhausted. Exceptions it
            raises are re-raised to the consumer in order.
        token: Cancellation token shared with the consumer.
        capacity: Maximum number of undelivered events.
        name: Worker thread name (diagnostics).
    """

    def __init__(
        self,
        producer: Producer,
        *,
        token: CancellationToken,
        capacity: int = STREAM_BRIDGE_QUEUE_CAPACITY,
        name: str = "unillm-stream",
        put_poll_seconds: float = STREAM_BRIDGE_PUT_POLL_SECONDS,
    ) -> None:
        self._producer = producer
        self._token = token
        self._queue: "queue.Queue[tuple[str, Any]]" = queue.Queue(maxsize=capacity)
        self._poll = put_poll_seconds
        self._drained = False
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._token.register(self._wake)

    def start(self) -> "PushStreamBridge":
        self._thread.start()
        return self

    @property
    def worker(self) -> threading.Thread:
        return self._thread

    # -------------------------------------------------------------- producer
    def _put(self, item: tuple[str, Any]) -> None:
        while True:
            self._token.raise_if_cancelled()
            try:
                self._queue.put(item, timeout=self._poll)
                return
            except queue.Full:
                continue

    def _emit(self, event: Any) -> None:
        self._put((_EVENT, event))

    def _run(self) -> None:
        try:
            self._producer(self._emit, self._token)
        except CancelledError:
            return
        except BaseException as exc:  # handed to the consumer thread
            if self._token.cancelled:
                return
            try:
                self._put((_ERROR, exc))
            except CancelledError:
                return
            return
        try:
            self._put((_DONE, None))
        except CancelledError:
            return

    def _wake(self) -> None:
        try:
            self._queue.put_nowait((_WAKE, None))
        except queue.Full:
            pass  # consumer is not blocked on an empty queue

    # -------------------------------------------------------------- consumer
    def get(self, timeout: Optional[float] = None) -> Any:
        """Return the next event.

        Raises:
            EndOfStream: the producer finished and every event was delivered.
            CancelledError: the token was cancelled.
            queue.Empty: ``timeout`` elapsed with no event.
            Exception: whatever the producer raised.
        """
        if self._drained:
            raise EndOfStream()
        self._token.raise_if_cancelled()
        kind, payload = self._queue.get(timeout=timeout)
        self._token.raise_if_cancelled()
        if kind == _EVENT:
            return payload
        if kind == _DONE:
            self._drained = True
            raise EndOfStream()
        if kind == _ERROR:
            self._drained = True
            raise payload
        # stale wake marker without cancellation; keep waiting
        return self.get(timeout)

    def close(self, reason: str = "stream closed") -> None:
        """Cancel the producer and wake any blocked consumer (idempotent)."""
        self._token.cancel(reason)


__all__ = ["PushStreamBridge", "Producer", "Emit"]

"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` shared by a stream's consumer side and, for
push transports, its background producer. Besides polling (``cancelled`` /
``raise_if_cancelled``) the token runs registered callbacks on cancellation so
blocked readers and open connections can be released promptly.
"""

from __future__ import annotations

import threading
from threading import Lock
from typing import Callable, List

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token with cascading semantics.

    Thread-safe. Child tokens inherit cancellation when the parent is
    cancelled. ``cancel`` is idempotent; callbacks run once, outside the lock.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        self._event = threading.Event()
        self._parent: "CancellationToken | None" = parent
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, run callbacks and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
            children = list(self._children)
        self._event.set()
        for cb in callbacks:
            cb()
        for child in children:
            child.cancel(reason)

    def register(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on cancellation (immediately if already cancelled)."""
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)
                return
        callback()

    def cancel_after(self, seconds: float, reason: str = "deadline exceeded") -> threading.Timer:
        """Cancel automatically once ``seconds`` elapse; returns the started timer."""
        timer = threading.Timer(seconds, self.cancel, kwargs={"reason": reason})
        timer.daemon = True
        timer.start()
        return timer

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; returns ``cancelled``."""
        return self._event.wait(timeout)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def unlink_child(self, token: "CancellationToken") -> None:
        """Stop cascading to ``token``; unknown tokens are ignored."""
        with self._lock:
            if token in self._children:
                self._children.remove(token)

    def detach(self) -> None:
        """Drop pending callbacks and unlink from the parent.

        Used once the owner is finished so a long-lived parent token does not
        keep it (and whatever its callbacks reference) alive.
        """
        with self._lock:
            self._state.callbacks.clear()
            parent, self._parent = self._parent, None
        if parent is not None:
            parent.unlink_child(self)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]

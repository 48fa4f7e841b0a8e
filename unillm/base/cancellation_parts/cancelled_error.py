"""Cancellation error type.

Raised by :meth:`CancellationToken.raise_if_cancelled`. Stream code converts it
into a ``ProviderError`` with ``ErrorCode.CANCELLED`` at the public boundary.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively."""


__all__ = ["CancelledError"]

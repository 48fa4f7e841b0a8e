"""
End-of-stream signal.

Deliberately not a ``ProviderError``: reaching the end of a stream is a normal
outcome and must not be handled by error paths.
"""
from __future__ import annotations


class EndOfStream(Exception):
    """Raised by ``receive_next`` once a stream has no further deltas."""


__all__ = ["EndOfStream"]

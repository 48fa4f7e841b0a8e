"""ChatCompletionStream Protocol (single-class module).

The canonical streaming contract shared by every provider.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import ChatCompletionResponse


@runtime_checkable
class ChatCompletionStream(Protocol):
    """Pull-style stream of normalized deltas.

    ``receive_next`` returns one delta, raises ``EndOfStream`` once the stream
    is exhausted, or raises ``ProviderError``. ``close`` is idempotent and may
    be called at any time, including concurrently with ``receive_next``.
    """

    def receive_next(self) -> ChatCompletionResponse:
        ...

    def close(self) -> None:
        ...

"""Cancellation public surface (re-exports ``cancellation_parts``)."""

from .cancellation_parts.cancellation_token import CancellationToken
from .cancellation_parts.cancelled_error import CancelledError

__all__ = ["CancellationToken", "CancelledError"]

"""
Structured provider error exception type.

Wraps vendor SDK exceptions and local failures with a normalized ``ErrorCode``
so callers can branch on the kind of failure instead of vendor types.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        retryable: Hint for an outer retry layer; nothing here retries.
        raw: Optional original exception for diagnostics.
        vendor_code: Vendor supplied error code/type when available.
        status: HTTP status of the failed vendor call when available.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None
    vendor_code: Optional[str] = None
    status: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        detail = f" [{self.vendor_code}]" if self.vendor_code else ""
        return f"{self.provider}:{self.model or '-'} {self.code.value}{detail}: {self.message}"


__all__ = ["ProviderError"]

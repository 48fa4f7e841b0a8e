"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements HTTP status extraction, status-to-code mapping, message heuristics
and vendor detail extraction for the OpenAI, Anthropic, Google and httpx
exception shapes.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from a provider exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.code`` (google-api-core)
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status", "code"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and not isinstance(val, bool) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
    529: ErrorCode.UNAVAILABLE,  # anthropic "overloaded"
}

_RETRYABLE = frozenset(
    {
        ErrorCode.RATE_LIMIT,
        ErrorCode.TIMEOUT,
        ErrorCode.TRANSIENT,
        ErrorCode.UNAVAILABLE,
        ErrorCode.SERVER_ERROR,
    }
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for non-HTTP exceptions."""
    pattern_groups = (
        (ErrorCode.TIMEOUT, ("timeout", "timed out")),
        (ErrorCode.AUTH, ("unauthorized", "forbidden", "api key", "auth")),
        (ErrorCode.UNSUPPORTED, ("unsupported", "not supported")),
        (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
        (ErrorCode.CONFLICT, ("conflict", "already exists")),
        (ErrorCode.UNAVAILABLE, ("unavailable", "connection refused", "overloaded")),
        (ErrorCode.VALIDATION, ("validation", "invalid", "malformed")),
        (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
    )
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in pattern_groups:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (sync/async).
        3. HTTP status mapping.
        4. Substring heuristics.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


def _extract_vendor_detail(exc: Exception) -> tuple[Optional[str], str]:
    """Return ``(vendor_code, message)`` from an SDK exception.

    Handles the OpenAI ``APIError`` shape (``code``/``message``), Anthropic's
    ``body = {"error": {"type", "message"}}`` and falls back to ``str(exc)``.
    """
    vendor_code = getattr(exc, "code", None)
    message = getattr(exc, "message", None)
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        err = body.get("error", body)
        if isinstance(err, dict):
            vendor_code = vendor_code or err.get("type") or err.get("code")
            message = err.get("message") or message
    if vendor_code is not None and not isinstance(vendor_code, str):
        vendor_code = str(vendor_code)
    if not isinstance(message, str) or not message:
        message = str(exc) or exc.__class__.__name__
    return vendor_code, message


def to_provider_error(exc: Exception, *, provider: str, model: Optional[str] = None) -> ProviderError:
    """Wrap ``exc`` into a :class:`ProviderError` (returned unchanged if it already is one)."""
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    vendor_code, message = _extract_vendor_detail(exc)
    return ProviderError(
        code=code,
        message=message,
        provider=provider,
        model=model,
        retryable=code in _RETRYABLE,
        raw=exc,
        vendor_code=vendor_code,
        status=_extract_status(exc),
    )


__all__ = [
    "classify_exception",
    "to_provider_error",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]

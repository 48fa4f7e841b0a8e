"""
Normalized provider error codes (taxonomy).

Defines the ``ErrorCode`` enumeration used across provider adapters, stream
normalizers and logging. Values are lowercase snake_case and form a stable
public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    # local failures detected before any network call
    CONFIGURATION = "configuration"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    # vendor behaviour outside the normalizer's known contract
    PROTOCOL = "protocol"
    CANCELLED = "cancelled"
    # transport / vendor API failures
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]

"""
Canonical finish reasons.

``None`` is used for "not finished yet"; every terminating delta or complete
response carries one of the enum members below.
"""
from __future__ import annotations

from enum import Enum


class FinishReason(str, Enum):
    """Why a turn ended."""

    STOP = "stop"
    TOOL_CALLS = "tool_calls"
    MAX_TOKENS = "max_tokens"


__all__ = ["FinishReason"]

"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``unillm.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.end_of_stream import EndOfStream
from .errors_parts.classification import classify_exception, to_provider_error

__all__ = ["ErrorCode", "ProviderError", "EndOfStream", "classify_exception", "to_provider_error"]

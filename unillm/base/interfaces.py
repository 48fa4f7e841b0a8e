"""
Provider-agnostic interfaces (Protocols) for the providers layer.

Re-exports the single-class modules under ``unillm.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import ChatCompletionStream, LLMProvider, StreamHandler

__all__ = ["ChatCompletionStream", "LLMProvider", "StreamHandler"]

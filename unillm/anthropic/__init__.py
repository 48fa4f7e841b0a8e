"""Anthropic Claude provider package (direct API and Vertex AI)."""

from .client import AnthropicProvider

__all__ = ["AnthropicProvider"]

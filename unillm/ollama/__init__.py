"""Ollama provider package (local daemon over HTTP)."""

from .client import OllamaProvider
from .transport import OllamaResponseError, OllamaTransport

__all__ = ["OllamaProvider", "OllamaTransport", "OllamaResponseError"]

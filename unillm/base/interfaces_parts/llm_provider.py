"""LLMProvider Protocol (single-class module).

Defines the request surface every provider implements.
"""

from __future__ import annotations

from typing import Optional, Protocol, Tuple, runtime_checkable

from ..cancellation import CancellationToken
from ..models import ChatCompletionRequest, ChatCompletionResponse
from .chat_completion_stream import ChatCompletionStream


@runtime_checkable
class LLMProvider(Protocol):
    """Minimal interface for Large Language Model providers.

    Implementations map ``ChatCompletionRequest`` to their SDK parameters,
    normalize output to ``ChatCompletionResponse`` and never leak SDK objects
    upstream. Failures are raised as ``ProviderError``.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g., ``"openai"`` or ``"anthropic"``."""
        ...

    def supported_models(self) -> Tuple[str, ...]:
        """Models accepted by this provider instance."""
        ...

    def create_chat_completion(
        self,
        request: ChatCompletionRequest,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> ChatCompletionResponse:
        """Execute a single, non-streaming chat completion."""
        ...

    def create_chat_completion_stream(
        self,
        request: ChatCompletionRequest,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> ChatCompletionStream:
        """Open a normalized stream for the request."""
        ...

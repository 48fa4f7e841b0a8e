"""
Provider-agnostic core.

Exports the canonical data model, error taxonomy, cancellation token,
interfaces and the provider factory. Streaming machinery lives in
``unillm.base.streaming`` and the shared adapter base in
``unillm.base.provider_base``; they depend on ``unillm.config`` and are not
imported here so that ``unillm.config`` can read ``unillm.base.constants``.
"""

from .cancellation import CancellationToken, CancelledError
from .errors import EndOfStream, ErrorCode, ProviderError, classify_exception, to_provider_error
from .factory import ProviderFactory, UnknownProviderError, create_provider
from .interfaces import ChatCompletionStream, LLMProvider, StreamHandler
from .models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    ContentPart,
    FinishReason,
    ImagePart,
    InputMessage,
    OutputMessage,
    Role,
    TextPart,
    Tool,
    ToolCall,
    ToolResult,
    Usage,
)

__all__ = [
    # Models
    "Role",
    "ContentPart",
    "TextPart",
    "ImagePart",
    "Tool",
    "ToolCall",
    "ToolResult",
    "InputMessage",
    "OutputMessage",
    "FinishReason",
    "Usage",
    "Choice",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    # Errors
    "ErrorCode",
    "ProviderError",
    "EndOfStream",
    "classify_exception",
    "to_provider_error",
    # Interfaces
    "LLMProvider",
    "ChatCompletionStream",
    "StreamHandler",
    # Factory
    "ProviderFactory",
    "UnknownProviderError",
    "create_provider",
    # Cancellation
    "CancellationToken",
    "CancelledError",
]

"""unillm package

One request and response shape over OpenAI, Google Gemini, Anthropic Claude
(direct and via Vertex AI) and a local Ollama daemon, for single-shot and
streamed chat completions with tool calling and images.

Public API (re-exported):
    - Version: ``__version__``
    - Data model: ``ChatCompletionRequest``, ``ChatCompletionResponse``,
      ``InputMessage``, ``TextPart``, ``ImagePart``, ``Tool``, ``ToolCall``,
      ``ToolResult``, ``OutputMessage``, ``FinishReason``, ``Usage``
    - Exceptions: ``ProviderError``, ``ErrorCode``, ``EndOfStream``
    - Factory: ``create_provider`` / ``ProviderFactory``
    - Streaming consumer: ``consume_stream``, ``stream_chat_completion``,
      ``CallbackStreamHandler``
    - Cancellation: ``CancellationToken``

Provider classes are imported from their subpackages
(``unillm.openai.OpenAIProvider`` and so on) so that only the vendor SDKs in
use are loaded.
"""

from .base import (
    CancellationToken,
    CancelledError,
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    EndOfStream,
    ErrorCode,
    FinishReason,
    ImagePart,
    InputMessage,
    LLMProvider,
    OutputMessage,
    ProviderError,
    ProviderFactory,
    StreamHandler,
    TextPart,
    Tool,
    ToolCall,
    ToolResult,
    UnknownProviderError,
    Usage,
    create_provider,
)
from .base.streaming import CallbackStreamHandler, consume_stream, stream_chat_completion

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "Choice",
    "InputMessage",
    "TextPart",
    "ImagePart",
    "Tool",
    "ToolCall",
    "ToolResult",
    "OutputMessage",
    "FinishReason",
    "Usage",
    "ProviderError",
    "ErrorCode",
    "EndOfStream",
    "LLMProvider",
    "StreamHandler",
    "ProviderFactory",
    "UnknownProviderError",
    "create_provider",
    "CancellationToken",
    "CancelledError",
    "CallbackStreamHandler",
    "consume_stream",
    "stream_chat_completion",
]

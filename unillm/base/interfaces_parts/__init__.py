"""Single-class Protocol modules; import via ``unillm.base.interfaces``."""

from .chat_completion_stream import ChatCompletionStream
from .llm_provider import LLMProvider
from .stream_handler import StreamHandler

__all__ = ["ChatCompletionStream", "LLMProvider", "StreamHandler"]

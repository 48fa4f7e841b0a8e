"""Streaming primitives: normalization state, base stream, bridge and consumer."""

from .text_accumulator import TextAccumulator
from .tool_call_buffer import ToolCallBuffer
from .finish_reasons import FinishReasonTable
from .streaming_metrics import StreamMetrics, apply_token_usage
from .streaming_finalize import log_stream_end
from .normalized_stream import NormalizedStream
from .push_bridge import PushStreamBridge
from .callback_handler import CallbackStreamHandler
from .consumer import consume_stream, stream_chat_completion

__all__ = [
    "TextAccumulator",
    "ToolCallBuffer",
    "FinishReasonTable",
    "StreamMetrics",
    "apply_token_usage",
    "log_stream_end",
    "NormalizedStream",
    "PushStreamBridge",
    "CallbackStreamHandler",
    "consume_stream",
    "stream_chat_completion",
]

"""
Provider-agnostic domain models public surface.

This module re-exports the one-class-per-file implementations under
``unillm.base.models_parts`` so call sites have a single stable import path.
"""

from .models_parts.content_part import ContentPart, ContentPartType, ImagePart, TextPart
from .models_parts.tool import Tool
from .models_parts.tool_call import ToolCall
from .models_parts.tool_result import ToolResult
from .models_parts.message import InputMessage, Role
from .models_parts.output_message import OutputMessage
from .models_parts.finish_reason import FinishReason
from .models_parts.usage import Usage
from .models_parts.choice import Choice
from .models_parts.chat_request import ChatCompletionRequest
from .models_parts.chat_response import ChatCompletionResponse

__all__ = [
    "ContentPart",
    "ContentPartType",
    "TextPart",
    "ImagePart",
    "Tool",
    "ToolCall",
    "ToolResult",
    "InputMessage",
    "Role",
    "OutputMessage",
    "FinishReason",
    "Usage",
    "Choice",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
]

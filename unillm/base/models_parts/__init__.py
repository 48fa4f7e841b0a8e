"""One-class-per-file canonical model parts; import via ``unillm.base.models``."""

from .content_part import ContentPart, ContentPartType, ImagePart, TextPart
from .tool import Tool
from .tool_call import ToolCall
from .tool_result import ToolResult
from .message import InputMessage, Role
from .output_message import OutputMessage
from .finish_reason import FinishReason
from .usage import Usage
from .choice import Choice
from .chat_request import ChatCompletionRequest
from .chat_response import ChatCompletionResponse

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

"""
Pydantic DTOs and validators for canonical chat requests.

Purpose
-------
Providers run :func:`validate_request` before translating a request, so
structural mistakes (empty conversations, out-of-range sampling values, tool
turns that answer no pending call, undecodable images) fail locally with
``ErrorCode.VALIDATION`` instead of as an opaque vendor 400.

External dependencies: Pydantic only (no network calls).
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..errors import ErrorCode, ProviderError
from ..models import ChatCompletionRequest, ImagePart, TextPart


Role = Literal["user", "assistant", "tool"]


class ContentPartDTO(BaseModel):
    """Text or image part; images must carry valid base64 and a MIME type."""

    type: Literal["text", "image"]
    text: Optional[str] = None
    data: Optional[str] = None
    media_type: Optional[str] = None

    @model_validator(mode="after")
    def _validate_variant(self) -> "ContentPartDTO":
        if self.type == "text":
            if self.text is None:
                raise ValueError("text part requires text")
            return self
        if not self.data or not self.media_type:
            raise ValueError("image part requires data and media_type")
        try:
            base64.b64decode(self.data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"image data is not valid base64: {exc}") from exc
        return self


class ToolCallDTO(BaseModel):
    id: str = Field(..., min_length=1)
    function_name: str = Field(..., min_length=1)
    arguments: str


class ToolResultDTO(BaseModel):
    tool_call_id: str = Field(..., min_length=1)
    function_name: str
    result: str
    is_error: bool = False


class MessageDTO(BaseModel):
    """One conversation turn.

    Rules:
        - ``tool`` turns carry at least one tool result and nothing else.
        - ``user`` turns carry content and no tool data.
        - ``assistant`` turns carry content or tool calls, never tool results.
    """

    role: Role
    content: List[ContentPartDTO] = Field(default_factory=list)
    tool_calls: List[ToolCallDTO] = Field(default_factory=list)
    tool_results: List[ToolResultDTO] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_role_payload(self) -> "MessageDTO":
        if self.role == "tool":
            if not self.tool_results:
                raise ValueError("tool message requires tool_results")
            if self.tool_calls:
                raise ValueError("tool message cannot carry tool_calls")
            return self
        if self.tool_results:
            raise ValueError(f"{self.role} message cannot carry tool_results")
        if self.role == "user":
            if self.tool_calls:
                raise ValueError("user message cannot carry tool_calls")
            if not self.content:
                raise ValueError("user message requires content")
        elif not self.content and not self.tool_calls:
            raise ValueError("assistant message requires content or tool_calls")
        return self


class ToolSpecDTO(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    parameters: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("parameters")
    @classmethod
    def _object_schema(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        if value and value.get("type", "object") != "object":
            raise ValueError("tool parameters must describe an object")
        return value


class ChatRequestDTO(BaseModel):
    """Validated view of a ``ChatCompletionRequest``.

    Raises:
        ValidationError: on invalid roles, empty content, out-of-range values,
            duplicate tool names, or tool results that answer no call issued by
            the preceding assistant turn.
    """

    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    system_prompt: Optional[str] = None
    tools: List[ToolSpecDTO] = Field(default_factory=list)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    json_mode: bool = False

    @model_validator(mode="after")
    def _validate_sequence(self) -> "ChatRequestDTO":
        names = [t.name for t in self.tools]
        if len(names) != len(set(names)):
            raise ValueError("tool names must be unique")
        open_calls: set[str] = set()
        for index, message in enumerate(self.messages):
            if message.role == "assistant":
                open_calls = {c.id for c in message.tool_calls}
            elif message.role == "tool":
                unknown = [r.tool_call_id for r in message.tool_results if r.tool_call_id not in open_calls]
                if unknown:
                    raise ValueError(
                        f"message {index}: tool results {unknown} do not answer the preceding assistant tool calls"
                    )
            else:
                open_calls = set()
        return self


def _part_payload(part: Any) -> Dict[str, Any]:
    if isinstance(part, TextPart):
        return {"type": "text", "text": part.text}
    if isinstance(part, ImagePart):
        return {"type": "image", "data": part.data, "media_type": part.media_type}
    raise TypeError(f"unsupported content part {type(part).__name__}")


def request_payload(request: ChatCompletionRequest) -> Dict[str, Any]:
    """Plain mapping view of ``request`` (image payloads included) for validation."""
    return {
        "model": request.model,
        "system_prompt": request.system_prompt,
        "temperature": request.temperature,
        "top_p": request.top_p,
        "max_tokens": request.max_tokens,
        "json_mode": request.json_mode,
        "tools": [
            {"name": t.name, "description": t.description, "parameters": dict(t.parameters)}
            for t in request.tools
        ],
        "messages": [
            {
                "role": m.role,
                "content": [_part_payload(p) for p in m.content],
                "tool_calls": [c.to_dict() for c in m.tool_calls],
                "tool_results": [r.to_dict() for r in m.tool_results],
            }
            for m in request.messages
        ],
    }


def validate_request(request: ChatCompletionRequest, *, provider: str) -> ChatRequestDTO:
    """Validate ``request`` and return the DTO.

    Raises:
        ProviderError: ``VALIDATION`` carrying pydantic's error summary.
    """
    try:
        return ChatRequestDTO.model_validate(request_payload(request))
    except (ValidationError, TypeError) as exc:
        raise ProviderError(
            code=ErrorCode.VALIDATION,
            message=str(exc),
            provider=provider,
            model=request.model,
            raw=exc,
        ) from exc


__all__ = [
    "Role",
    "ContentPartDTO",
    "ToolCallDTO",
    "ToolResultDTO",
    "MessageDTO",
    "ToolSpecDTO",
    "ChatRequestDTO",
    "request_payload",
    "validate_request",
]

"""
Helper utilities for the OpenAI-compatible provider.

Purpose:
- Translate the canonical request into Chat Completions parameters.
- Build canonical responses from non-streaming SDK results.
- Hold the OpenAI finish-reason table shared by both paths.

No network I/O happens here; functions only prepare inputs or interpret
outputs, so they are exercised directly with ``SimpleNamespace`` fakes.
"""

from __future__ import annotations

import typing as _t

from ..base.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    FinishReason,
    ImagePart,
    InputMessage,
    OutputMessage,
    TextPart,
    ToolCall,
    Usage,
)
from ..base.streaming import FinishReasonTable
from ..base.utils import dump_arguments
from ..config.defaults import OPENAI_DEFAULT_TOP_P, OPENAI_REASONING_EFFORT, OPENAI_REASONING_MODELS

PROVIDER = "openai"

FINISH_REASONS = FinishReasonTable(
    PROVIDER,
    {
        "stop": FinishReason.STOP,
        "content_filter": FinishReason.STOP,
        "length": FinishReason.MAX_TOKENS,
        "tool_calls": FinishReason.TOOL_CALLS,
        "function_call": FinishReason.TOOL_CALLS,
        None: None,
        "": None,
    },
)


def _content_parts(message: InputMessage) -> list[dict]:
    parts: list[dict] = []
    for part in message.content:
        if isinstance(part, TextPart):
            parts.append({"type": "text", "text": part.text})
        elif isinstance(part, ImagePart):
            parts.append({"type": "image_url", "image_url": {"url": part.data_uri(), "detail": "high"}})
    return parts


def _tool_call_param(call: ToolCall) -> dict:
    return {
        "id": call.id,
        "type": "function",
        "function": {"name": call.function_name, "arguments": call.arguments},
    }


def build_messages(request: ChatCompletionRequest) -> list[dict]:
    """Translate canonical messages into Chat Completions message params.

    - The system prompt becomes a leading ``system`` message.
    - Images are sent as ``data:`` URIs with ``detail="high"``.
    - Each tool result becomes its own ``tool`` message keyed by call id.
    """
    messages: list[dict] = []
    if request.system_prompt:
        messages.append({"role": "system", "content": request.system_prompt})
    for message in request.messages:
        if message.role == "tool":
            for result in message.tool_results:
                messages.append({"role": "tool", "tool_call_id": result.tool_call_id, "content": result.result})
            continue
        if message.role == "assistant":
            entry: dict = {"role": "assistant", "content": message.text() or None}
            if message.tool_calls:
                entry["tool_calls"] = [_tool_call_param(c) for c in message.tool_calls]
            messages.append(entry)
            continue
        messages.append({"role": "user", "content": _content_parts(message)})
    return messages


def build_tools(request: ChatCompletionRequest) -> list[dict]:
    return [
        {
            "type": "function",
            "function": {
                "name": tool.name,
                "description": tool.description,
                "parameters": dict(tool.parameters),
            },
        }
        for tool in request.tools
    ]


def build_params(request: ChatCompletionRequest, *, stream: bool) -> dict:
    """Return keyword arguments for ``client.chat.completions.create``."""
    params: dict = {
        "model": request.model,
        "messages": build_messages(request),
        "n": 1,
        "top_p": request.top_p if request.top_p is not None else OPENAI_DEFAULT_TOP_P,
        "stream": stream,
    }
    if request.temperature is not None:
        params["temperature"] = request.temperature
    if request.max_tokens is not None:
        params["max_completion_tokens"] = request.max_tokens
    if request.tools:
        params["tools"] = build_tools(request)
    if request.json_mode:
        params["response_format"] = {"type": "json_object"}
    if request.model in OPENAI_REASONING_MODELS:
        params["reasoning_effort"] = OPENAI_REASONING_EFFORT
    return params


def usage_from(resp: _t.Any) -> Usage:
    usage = getattr(resp, "usage", None)
    if usage is None:
        return Usage()
    return Usage(
        prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
        completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
        total_tokens=getattr(usage, "total_tokens", 0) or 0,
    )


def response_from_completion(resp: _t.Any, *, model: str) -> ChatCompletionResponse:
    """Build a canonical response from a non-streaming ``ChatCompletion``."""
    choices = []
    for position, choice in enumerate(getattr(resp, "choices", None) or ()):
        msg = choice.message
        calls = tuple(
            ToolCall(
                id=tc.id,
                function_name=tc.function.name,
                arguments=dump_arguments(tc.function.arguments),
            )
            for tc in (getattr(msg, "tool_calls", None) or ())
        )
        finish = FINISH_REASONS.resolve(choice.finish_reason, has_tool_calls=bool(calls), model=model)
        choices.append(
            Choice(
                index=getattr(choice, "index", position),
                message=OutputMessage(content=getattr(msg, "content", None) or "", tool_calls=calls),
                finish_reason=finish,
            )
        )
    return ChatCompletionResponse(id=getattr(resp, "id", None), choices=tuple(choices), usage=usage_from(resp))


__all__ = [
    "FINISH_REASONS",
    "build_messages",
    "build_tools",
    "build_params",
    "response_from_completion",
    "usage_from",
]

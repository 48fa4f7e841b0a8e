"""Anthropic helpers module.

Purpose:
- Translate the canonical request into Messages API parameters shared by
  ``client.messages.create`` and ``client.messages.stream``.
- Build canonical responses from non-streaming ``Message`` objects.
- Hold the Claude finish-reason table.

The SDK is not imported here; responses are read structurally so tests can
use ``SimpleNamespace`` stand-ins.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from ..base.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    FinishReason,
    ImagePart,
    InputMessage,
    TextPart,
    ToolCall,
    Usage,
)
from ..base.streaming import FinishReasonTable
from ..base.utils import dump_arguments
from ..config.defaults import ANTHROPIC_DEFAULT_MAX_TOKENS

PROVIDER = "anthropic"

FINISH_REASONS = FinishReasonTable(
    PROVIDER,
    {
        "end_turn": FinishReason.STOP,
        "stop_sequence": FinishReason.STOP,
        "refusal": FinishReason.STOP,
        "max_tokens": FinishReason.MAX_TOKENS,
        "tool_use": FinishReason.TOOL_CALLS,
        None: None,
    },
)


def _content_blocks(message: InputMessage) -> list[dict]:
    blocks: list[dict] = []
    for part in message.content:
        if isinstance(part, TextPart):
            if part.text:
                blocks.append({"type": "text", "text": part.text})
        elif isinstance(part, ImagePart):
            blocks.append(
                {
                    "type": "image",
                    "source": {"type": "base64", "media_type": part.media_type, "data": part.data},
                }
            )
    return blocks


def _tool_input(arguments: str) -> Any:
    try:
        return json.loads(arguments) if arguments else {}
    except ValueError:
        # forwarded verbatim; the API reports the malformed input
        return arguments


def build_messages(request: ChatCompletionRequest) -> list[dict]:
    """Translate canonical messages into Messages API turns.

    - Tool turns become ``user`` turns of ``tool_result`` blocks.
    - Assistant tool calls become ``tool_use`` blocks with decoded input.
    - Images become base64 ``source`` blocks.
    """
    turns: list[dict] = []
    for message in request.messages:
        if message.role == "tool":
            turns.append(
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "tool_result",
                            "tool_use_id": r.tool_call_id,
                            "content": [{"type": "text", "text": r.result}],
                            "is_error": r.is_error,
                        }
                        for r in message.tool_results
                    ],
                }
            )
            continue
        blocks = _content_blocks(message)
        if message.role == "assistant":
            blocks.extend(
                {
                    "type": "tool_use",
                    "id": call.id,
                    "name": call.function_name,
                    "input": _tool_input(call.arguments),
                }
                for call in message.tool_calls
            )
        turns.append({"role": message.role, "content": blocks})
    return turns


def build_tools(request: ChatCompletionRequest) -> list[dict]:
    return [
        {"name": t.name, "description": t.description, "input_schema": dict(t.parameters)}
        for t in request.tools
    ]


def build_params(request: ChatCompletionRequest) -> dict:
    """Return keyword arguments for ``messages.create`` / ``messages.stream``.

    ``max_tokens`` is required by the API and falls back to
    ``ANTHROPIC_DEFAULT_MAX_TOKENS``. JSON mode has no native switch; it is
    requested through the system prompt.
    """
    params: dict[str, Any] = {
        "model": request.model,
        "max_tokens": request.max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS,
        "messages": build_messages(request),
    }
    system = request.system_prompt or ""
    if request.json_mode:
        system = (system + "\n\n" if system else "") + "Respond only with a single valid JSON object."
    if system:
        params["system"] = system
    if request.temperature is not None:
        params["temperature"] = request.temperature
    if request.top_p is not None:
        params["top_p"] = request.top_p
    if request.tools:
        params["tools"] = build_tools(request)
        params["tool_choice"] = {"type": "auto"}
    return params


def usage_from(raw: Any, *, input_tokens: Optional[int] = None) -> Usage:
    """Build ``Usage`` from an SDK usage object; total is input + output."""
    if raw is None and input_tokens is None:
        return Usage()
    prompt = getattr(raw, "input_tokens", None)
    if prompt is None:
        prompt = input_tokens
    prompt = prompt or 0
    completion = getattr(raw, "output_tokens", 0) or 0
    return Usage(prompt_tokens=prompt, completion_tokens=completion, total_tokens=prompt + completion)


def tool_call_from_block(block: Any) -> ToolCall:
    return ToolCall(id=block.id, function_name=block.name, arguments=dump_arguments(getattr(block, "input", None)))


def response_from_message(message: Any, *, model: str) -> ChatCompletionResponse:
    """Build a canonical response from a non-streaming ``Message``."""
    texts: list[str] = []
    calls: list[ToolCall] = []
    for block in getattr(message, "content", None) or ():
        kind = getattr(block, "type", None)
        if kind == "text":
            texts.append(block.text or "")
        elif kind == "tool_use":
            calls.append(tool_call_from_block(block))
    finish = FINISH_REASONS.resolve(getattr(message, "stop_reason", None), has_tool_calls=bool(calls), model=model)
    return ChatCompletionResponse.single(
        "".join(texts),
        tuple(calls),
        finish,
        id=getattr(message, "id", None),
        usage=usage_from(getattr(message, "usage", None)),
    )


__all__ = [
    "FINISH_REASONS",
    "build_messages",
    "build_tools",
    "build_params",
    "usage_from",
    "tool_call_from_block",
    "response_from_message",
]

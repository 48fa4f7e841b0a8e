"""
Ollama helpers module.

Purpose:
- Build ``/api/chat`` payloads from canonical requests.
- Translate response chunks (streamed NDJSON lines and the single
  non-streaming body share the same shape) into text, tool calls, finish
  reason and usage.

Ollama returns tool calls whole and without ids; they are numbered
``call_<n>`` (from 0) in emission order on both paths.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..base.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    FinishReason,
    ImagePart,
    TextPart,
    ToolCall,
    Usage,
)
from ..base.streaming import FinishReasonTable
from ..base.utils import dump_arguments

PROVIDER = "ollama"

# Consulted only for chunks with ``done: true``.
FINISH_REASONS = FinishReasonTable(
    PROVIDER,
    {
        "stop": FinishReason.STOP,
        "": FinishReason.STOP,
        "load": FinishReason.STOP,
        "unload": FinishReason.STOP,
        "length": FinishReason.MAX_TOKENS,
    },
)


def _arguments(raw: str) -> Any:
    try:
        return json.loads(raw) if raw else {}
    except ValueError:
        return {}


def build_messages(request: ChatCompletionRequest) -> List[Dict[str, Any]]:
    """Translate canonical messages into ``/api/chat`` messages.

    Text parts are joined; images travel as bare base64 strings. Each tool
    result becomes its own ``tool`` message naming the function.
    """
    messages: List[Dict[str, Any]] = []
    if request.system_prompt:
        messages.append({"role": "system", "content": request.system_prompt})
    for message in request.messages:
        if message.role == "tool":
            messages.extend(
                {"role": "tool", "content": r.result, "tool_name": r.function_name}
                for r in message.tool_results
            )
            continue
        entry: Dict[str, Any] = {
            "role": message.role,
            "content": "".join(p.text for p in message.content if isinstance(p, TextPart)),
        }
        images = [p.data for p in message.content if isinstance(p, ImagePart)]
        if images:
            entry["images"] = images
        if message.tool_calls:
            entry["tool_calls"] = [
                {"function": {"name": c.function_name, "arguments": _arguments(c.arguments)}}
                for c in message.tool_calls
            ]
        messages.append(entry)
    return messages


def build_payload(request: ChatCompletionRequest, *, stream: bool) -> Dict[str, Any]:
    """Return the JSON body for ``POST /api/chat``."""
    options: Dict[str, Any] = {}
    if request.temperature is not None:
        options["temperature"] = request.temperature
    if request.top_p is not None:
        options["top_p"] = request.top_p
    if request.max_tokens is not None:
        options["num_predict"] = request.max_tokens
    payload: Dict[str, Any] = {
        "model": request.model,
        "messages": build_messages(request),
        "stream": stream,
    }
    if options:
        payload["options"] = options
    if request.json_mode:
        payload["format"] = "json"
    if request.tools:
        payload["tools"] = [
            {
                "type": "function",
                "function": {
                    "name": t.name,
                    "description": t.description,
                    "parameters": dict(t.parameters),
                },
            }
            for t in request.tools
        ]
    return payload


@dataclass
class ChunkParts:
    """Normalized content of one Ollama response object."""

    text: str = ""
    tool_calls: Tuple[ToolCall, ...] = ()
    raw_finish: Optional[str] = None
    usage: Optional[Usage] = None


class ToolCallCounter:
    """Hands out ``call_<n>`` ids in emission order."""

    def __init__(self) -> None:
        self._next = 0

    def take(self, function: Mapping[str, Any]) -> ToolCall:
        call = ToolCall(
            id=f"call_{self._next}",
            function_name=str(function.get("name") or ""),
            arguments=dump_arguments(function.get("arguments")),
        )
        self._next += 1
        return call


def parse_chunk(chunk: Mapping[str, Any], counter: ToolCallCounter) -> ChunkParts:
    """Extract text, tool calls, finish reason and usage from a chunk.

    ``raw_finish`` stays ``None`` until ``done`` is true; a missing
    ``done_reason`` on the final chunk is reported as ``""`` (a plain stop).
    """
    message = chunk.get("message") or {}
    calls = tuple(
        counter.take(tc.get("function") or {})
        for tc in (message.get("tool_calls") or ())
    )
    parts = ChunkParts(text=message.get("content") or "", tool_calls=calls)
    if chunk.get("done"):
        parts.raw_finish = chunk.get("done_reason") or ""
        prompt = chunk.get("prompt_eval_count") or 0
        completion = chunk.get("eval_count") or 0
        parts.usage = Usage(prompt_tokens=prompt, completion_tokens=completion, total_tokens=prompt + completion)
    return parts


def response_from_body(body: Mapping[str, Any], *, model: str) -> ChatCompletionResponse:
    """Build a canonical response from a non-streaming ``/api/chat`` body."""
    parts = parse_chunk(body, ToolCallCounter())
    finish = FINISH_REASONS.resolve(
        parts.raw_finish if parts.raw_finish is not None else "",
        has_tool_calls=bool(parts.tool_calls),
        model=model,
    )
    return ChatCompletionResponse.single(
        parts.text,
        parts.tool_calls,
        finish,
        usage=parts.usage,
    )


__all__ = [
    "FINISH_REASONS",
    "ChunkParts",
    "ToolCallCounter",
    "build_messages",
    "build_payload",
    "parse_chunk",
    "response_from_body",
]

"""
Helper utilities for the Gemini provider.

Purpose:
- Translate canonical requests into ``google-generativeai`` inputs
  (contents, tools, generation config, system instruction).
- Normalize candidates (text parts, function-call parts, finish reasons,
  usage metadata) for both the streaming and non-streaming paths.

Gemini returns no tool-call ids; calls are numbered ``call_<n>`` (from 0) in
emission order by :class:`ToolCallNumbering`, shared by both paths so they
produce the same ids for the same payload.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Mapping, Optional, Tuple

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
from ..base.utils import dump_arguments, to_plain
from ..config.defaults import GEMINI_UNSET_TEMPERATURE

PROVIDER = "gemini"

# OTHER and MALFORMED_FUNCTION_CALL stay unmapped: they fail the stream with PROTOCOL.
FINISH_REASONS = FinishReasonTable(
    PROVIDER,
    {
        "STOP": FinishReason.STOP,
        "SAFETY": FinishReason.STOP,
        "RECITATION": FinishReason.STOP,
        "BLOCKLIST": FinishReason.STOP,
        "PROHIBITED_CONTENT": FinishReason.STOP,
        "SPII": FinishReason.STOP,
        "MAX_TOKENS": FinishReason.MAX_TOKENS,
        "FINISH_REASON_UNSPECIFIED": None,
        None: None,
    },
)

# Candidate.FinishReason enum values, for payloads that carry plain ints.
_FINISH_REASON_NAMES = {
    0: "FINISH_REASON_UNSPECIFIED",
    1: "STOP",
    2: "MAX_TOKENS",
    3: "SAFETY",
    4: "RECITATION",
    5: "OTHER",
    6: "BLOCKLIST",
    7: "PROHIBITED_CONTENT",
    8: "SPII",
    9: "MALFORMED_FUNCTION_CALL",
}

_SCHEMA_TYPES = {
    "object": "OBJECT",
    "string": "STRING",
    "number": "NUMBER",
    "integer": "INTEGER",
    "boolean": "BOOLEAN",
    "array": "ARRAY",
}


def finish_reason_name(raw: Any) -> Optional[str]:
    """Reduce an SDK enum, int or string finish reason to its upper-case name."""
    if raw is None:
        return None
    name = getattr(raw, "name", None)
    if isinstance(name, str):
        return name
    if isinstance(raw, int):
        return _FINISH_REASON_NAMES.get(raw, str(raw))
    return str(raw).upper()


def convert_schema_type(value: Any) -> str:
    """Map a JSON-Schema type name to the Gemini ``Type`` enum name."""
    if not isinstance(value, str):
        return "TYPE_UNSPECIFIED"
    return _SCHEMA_TYPES.get(value.lower(), "TYPE_UNSPECIFIED")


def convert_schema(parameters: Mapping[str, Any]) -> dict:
    """Convert a tool's parameter schema into a Gemini ``Schema`` mapping.

    Top-level is always ``OBJECT``; each property keeps its ``type`` and
    ``description``. Nested object/array schemas are converted recursively.
    """
    schema: dict = {"type": "OBJECT", "properties": {}}
    for name, prop in (parameters.get("properties") or {}).items():
        if isinstance(prop, Mapping):
            schema["properties"][name] = _convert_property(prop)
    required = [r for r in (parameters.get("required") or ()) if isinstance(r, str)]
    if required:
        schema["required"] = required
    return schema


def _convert_property(prop: Mapping[str, Any]) -> dict:
    out: dict = {"type": convert_schema_type(prop.get("type"))}
    if isinstance(prop.get("description"), str):
        out["description"] = prop["description"]
    if isinstance(prop.get("enum"), list):
        out["enum"] = [str(v) for v in prop["enum"]]
    if out["type"] == "ARRAY" and isinstance(prop.get("items"), Mapping):
        out["items"] = _convert_property(prop["items"])
    if out["type"] == "OBJECT" and isinstance(prop.get("properties"), Mapping):
        nested = convert_schema(prop)
        out["properties"] = nested["properties"]
        if "required" in nested:
            out["required"] = nested["required"]
    return out


def build_tools(request: ChatCompletionRequest) -> Optional[list]:
    if not request.tools:
        return None
    return [
        {
            "function_declarations": [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": convert_schema(tool.parameters),
                }
            ]
        }
        for tool in request.tools
    ]


def _parts(message: InputMessage) -> list:
    parts: list = []
    for part in message.content:
        if isinstance(part, TextPart):
            if part.text:
                parts.append({"text": part.text})
        elif isinstance(part, ImagePart):
            parts.append({"inline_data": {"mime_type": part.media_type, "data": part.decoded()}})
    return parts


def _call_args(arguments: str) -> dict:
    try:
        value = json.loads(arguments) if arguments else {}
    except ValueError:
        return {}
    return value if isinstance(value, dict) else {}


def build_contents(request: ChatCompletionRequest) -> list:
    """Translate canonical messages into Gemini ``contents``.

    Roles map to ``user`` / ``model``. Tool results become ``function_response``
    parts on a user turn, keyed by function name.
    """
    contents: list = []
    for message in request.messages:
        if message.role == "tool":
            parts = [
                {
                    "function_response": {
                        "name": r.function_name,
                        "response": {"name": r.function_name, "content": r.result},
                    }
                }
                for r in message.tool_results
            ]
            contents.append({"role": "user", "parts": parts})
            continue
        parts = _parts(message)
        if message.role == "assistant":
            parts.extend(
                {"function_call": {"name": c.function_name, "args": _call_args(c.arguments)}}
                for c in message.tool_calls
            )
            contents.append({"role": "model", "parts": parts})
        else:
            contents.append({"role": "user", "parts": parts})
    return contents


def build_generation_config(request: ChatCompletionRequest) -> dict:
    """Return the ``generation_config`` mapping.

    An unset temperature is sent as ``GEMINI_UNSET_TEMPERATURE``; an explicit
    value (including ``0.0``) is sent unchanged. ``top_p`` is sent only when
    positive.
    """
    config: dict = {
        "candidate_count": 1,
        "temperature": request.temperature if request.temperature is not None else GEMINI_UNSET_TEMPERATURE,
    }
    if request.top_p is not None and request.top_p > 0:
        config["top_p"] = request.top_p
    if request.max_tokens is not None:
        config["max_output_tokens"] = request.max_tokens
    if request.json_mode:
        config["response_mime_type"] = "application/json"
    return config


def build_model_kwargs(request: ChatCompletionRequest) -> dict:
    """Keyword arguments for ``genai.GenerativeModel``."""
    kwargs: dict = {
        "model_name": request.model,
        "generation_config": build_generation_config(request),
    }
    if request.system_prompt:
        kwargs["system_instruction"] = request.system_prompt
    tools = build_tools(request)
    if tools:
        kwargs["tools"] = tools
    return kwargs


class ToolCallNumbering:
    """Assigns ``call_<n>`` ids and drops repeats of an already seen call.

    A call is a repeat when both its name and serialized arguments match one
    seen earlier in the same response.
    """

    def __init__(self) -> None:
        self._seen: List[Tuple[str, str]] = []

    def admit(self, name: str, arguments: str) -> Optional[ToolCall]:
        key = (name, arguments)
        if key in self._seen:
            return None
        call = ToolCall(id=f"call_{len(self._seen)}", function_name=name, arguments=arguments)
        self._seen.append(key)
        return call


def candidate_parts(candidate: Any) -> Tuple[str, List[Tuple[str, str]]]:
    """Return the concatenated text and ``(name, arguments)`` calls of a candidate."""
    content = getattr(candidate, "content", None)
    texts: List[str] = []
    calls: List[Tuple[str, str]] = []
    for part in getattr(content, "parts", None) or ():
        fn = getattr(part, "function_call", None)
        if fn is not None and getattr(fn, "name", None):
            calls.append((fn.name, dump_arguments(to_plain(getattr(fn, "args", None)))))
            continue
        text = getattr(part, "text", None)
        if text:
            texts.append(text)
    return "".join(texts), calls


def usage_from(metadata: Any) -> Usage:
    if metadata is None:
        return Usage()
    prompt = getattr(metadata, "prompt_token_count", 0) or 0
    completion = getattr(metadata, "candidates_token_count", 0) or 0
    total = getattr(metadata, "total_token_count", 0) or (prompt + completion)
    return Usage(prompt_tokens=prompt, completion_tokens=completion, total_tokens=total)


def admit_calls(numbering: ToolCallNumbering, calls: Iterable[Tuple[str, str]]) -> Tuple[ToolCall, ...]:
    admitted = (numbering.admit(name, args) for name, args in calls)
    return tuple(c for c in admitted if c is not None)


def response_from_generation(resp: Any, *, model: str) -> ChatCompletionResponse:
    """Build a canonical response from a non-streaming ``GenerateContentResponse``."""
    candidates = getattr(resp, "candidates", None) or ()
    usage = usage_from(getattr(resp, "usage_metadata", None))
    if not candidates:
        return ChatCompletionResponse.single(usage=usage)
    candidate = candidates[0]
    text, raw_calls = candidate_parts(candidate)
    calls = admit_calls(ToolCallNumbering(), raw_calls)
    finish = FINISH_REASONS.resolve(
        finish_reason_name(getattr(candidate, "finish_reason", None)),
        has_tool_calls=bool(calls),
        model=model,
    )
    return ChatCompletionResponse.single(text, calls, finish, usage=usage)


__all__ = [
    "FINISH_REASONS",
    "ToolCallNumbering",
    "admit_calls",
    "build_contents",
    "build_generation_config",
    "build_model_kwargs",
    "build_tools",
    "candidate_parts",
    "convert_schema",
    "convert_schema_type",
    "finish_reason_name",
    "response_from_generation",
    "usage_from",
]

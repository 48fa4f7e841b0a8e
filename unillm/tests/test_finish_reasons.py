"""Finish-reason tables: canonical mapping, override and unknown values."""
from __future__ import annotations

import pytest

from unillm.anthropic.helpers import FINISH_REASONS as CLAUDE
from unillm.base.errors import ErrorCode, ProviderError
from unillm.base.models import FinishReason
from unillm.gemini.helpers import FINISH_REASONS as GEMINI
from unillm.gemini.helpers import finish_reason_name
from unillm.ollama.helpers import FINISH_REASONS as OLLAMA
from unillm.openai.helpers import FINISH_REASONS as OPENAI


@pytest.mark.parametrize(
    "table, raw, expected",
    [
        (OPENAI, "stop", FinishReason.STOP),
        (OPENAI, "content_filter", FinishReason.STOP),
        (OPENAI, "length", FinishReason.MAX_TOKENS),
        (OPENAI, "tool_calls", FinishReason.TOOL_CALLS),
        (OPENAI, "", None),
        (CLAUDE, "end_turn", FinishReason.STOP),
        (CLAUDE, "refusal", FinishReason.STOP),
        (CLAUDE, "max_tokens", FinishReason.MAX_TOKENS),
        (CLAUDE, "tool_use", FinishReason.TOOL_CALLS),
        (GEMINI, "SAFETY", FinishReason.STOP),
        (GEMINI, "MAX_TOKENS", FinishReason.MAX_TOKENS),
        (GEMINI, "FINISH_REASON_UNSPECIFIED", None),
        (OLLAMA, "", FinishReason.STOP),
        (OLLAMA, "unload", FinishReason.STOP),
        (OLLAMA, "length", FinishReason.MAX_TOKENS),
    ],
)
def test_vendor_values_map_to_canonical(table, raw, expected):
    assert table.resolve(raw) is expected  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize("table, raw", [(OPENAI, "stop"), (CLAUDE, "end_turn"), (GEMINI, "STOP"), (OLLAMA, "stop")])
def test_stop_with_tool_calls_becomes_tool_calls(table, raw):
    assert table.resolve(raw, has_tool_calls=True) is FinishReason.TOOL_CALLS  # nosec B101 - pytest assert in tests


def test_max_tokens_is_not_overridden_by_tool_calls():
    assert OPENAI.resolve("length", has_tool_calls=True) is FinishReason.MAX_TOKENS  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize("table, raw", [(OPENAI, "weird"), (CLAUDE, "pause_turn"), (GEMINI, "OTHER"), (OLLAMA, "bogus")])
def test_unknown_value_is_a_protocol_error(table, raw):
    with pytest.raises(ProviderError) as exc:
        table.resolve(raw, model="m")
    assert exc.value.code is ErrorCode.PROTOCOL  # nosec B101 - pytest assert in tests
    assert repr(raw) in exc.value.message  # nosec B101 - pytest assert in tests


def test_gemini_finish_reason_names_from_enum_int_and_str():
    class _Enum:
        name = "MAX_TOKENS"

    assert finish_reason_name(_Enum()) == "MAX_TOKENS"  # nosec B101 - pytest assert in tests
    assert finish_reason_name(1) == "STOP"  # nosec B101 - pytest assert in tests
    assert finish_reason_name("safety") == "SAFETY"  # nosec B101 - pytest assert in tests
    assert finish_reason_name(None) is None  # nosec B101 - pytest assert in tests

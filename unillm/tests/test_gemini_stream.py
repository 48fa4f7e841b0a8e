"""Gemini stream normalization over fake ``GenerateContentResponse`` chunks."""
from __future__ import annotations

import logging
from types import SimpleNamespace as NS

import pytest

from unillm.base.errors import ErrorCode, ProviderError
from unillm.base.models import FinishReason
from unillm.gemini.stream import GeminiChatStream

from .fakes import drain, gemini_call, gemini_chunk, gemini_text

_LOG = logging.getLogger("unillm.tests")


def test_text_chunks_and_finish_by_enum_name():
    class _Stop:
        name = "STOP"

    chunks = [
        gemini_chunk([gemini_text("Bon")], finish=0),
        gemini_chunk([gemini_text("jour")], finish=_Stop(), usage=NS(prompt_token_count=4, candidates_token_count=2, total_token_count=6)),
    ]
    deltas = drain(GeminiChatStream(iter(chunks), model="gemini-2.0-flash", logger=_LOG))

    assert [d.content for d in deltas] == ["Bon", "jour"]  # nosec B101 - pytest assert in tests
    assert deltas[0].finish_reason is None  # nosec B101 - pytest assert in tests
    assert deltas[1].finish_reason is FinishReason.STOP  # nosec B101 - pytest assert in tests
    assert deltas[1].usage.total_tokens == 6  # nosec B101 - pytest assert in tests


def test_function_calls_get_synthesized_ids_and_repeats_are_dropped():
    chunks = [
        gemini_chunk([gemini_call("get_weather", {"location": "Paris"})]),
        gemini_chunk([gemini_call("get_weather", {"location": "Paris"}), gemini_call("get_time", {"tz": "CET"})]),
        gemini_chunk([], finish="STOP"),
    ]
    deltas = drain(GeminiChatStream(iter(chunks), model="gemini-1.5-pro", logger=_LOG))
    calls = [c for d in deltas for c in d.tool_calls]

    assert [(c.id, c.function_name) for c in calls] == [("call_0", "get_weather"), ("call_1", "get_time")]  # nosec B101 - pytest assert in tests
    assert calls[0].arguments == '{"location": "Paris"}'  # nosec B101 - pytest assert in tests
    assert deltas[-1].finish_reason is FinishReason.TOOL_CALLS  # nosec B101 - pytest assert in tests


def test_chunk_without_candidates_is_an_empty_delta():
    chunks = [NS(candidates=[], usage_metadata=None), gemini_chunk([gemini_text("x")], finish="MAX_TOKENS")]
    deltas = drain(GeminiChatStream(iter(chunks), model="gemini-1.5-flash", logger=_LOG))

    assert deltas[0].content == "" and deltas[0].finish_reason is None  # nosec B101 - pytest assert in tests
    assert deltas[1].finish_reason is FinishReason.MAX_TOKENS  # nosec B101 - pytest assert in tests


def test_close_cancels_the_underlying_call():
    cancelled = []

    class _Response:
        _iterator = NS(cancel=lambda: cancelled.append(True))

        def __iter__(self):
            return iter([gemini_chunk([gemini_text("a")])])

    stream = GeminiChatStream(_Response(), model="gemini-2.0-flash", logger=_LOG)
    stream.receive_next()
    stream.close()
    assert cancelled == [True]  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "finish, name",
    [(5, "OTHER"), (9, "MALFORMED_FUNCTION_CALL"), ("OTHER", "OTHER"), ("MALFORMED_FUNCTION_CALL", "MALFORMED_FUNCTION_CALL")],
)
def test_unmapped_finish_reasons_fail_with_protocol(finish, name):
    stream = GeminiChatStream(iter([gemini_chunk([gemini_text("x")], finish=finish)]), model="gemini-2.0-flash", logger=_LOG)
    with pytest.raises(ProviderError) as exc:
        stream.receive_next()
    assert exc.value.code is ErrorCode.PROTOCOL  # nosec B101 - pytest assert in tests
    assert name in exc.value.message  # nosec B101 - pytest assert in tests

"""Ollama provider: payload translation, transport and bridged streaming.

HTTP goes through ``httpx.MockTransport`` so no daemon is needed.
"""
from __future__ import annotations

import json
import threading
from dataclasses import replace

import httpx
import pytest

from unillm.base.cancellation import CancellationToken
from unillm.base.errors import EndOfStream, ErrorCode, ProviderError
from unillm.base.models import FinishReason, ImagePart, InputMessage, ToolCall, ToolResult
from unillm.ollama import OllamaProvider, OllamaResponseError, OllamaTransport
from unillm.ollama.helpers import build_payload

from .fakes import WEATHER_TOOL, drain, make_request, ndjson

MODEL = "llama3.2:3b"


def _provider(handler, **kwargs) -> OllamaProvider:
    client = httpx.Client(base_url="http://ollama.test:11434", transport=httpx.MockTransport(handler))
    return OllamaProvider("http://ollama.test:11434", http_client=client, **kwargs)


def test_payload_carries_system_prompt_options_images_and_json_mode():
    request = make_request(
        MODEL,
        "Describe",
        system_prompt="Be brief.",
        temperature=0.0,
        top_p=0.9,
        max_tokens=64,
        json_mode=True,
    )
    request = replace(request, messages=(InputMessage.user("Describe", ImagePart(data="aGk=", media_type="image/png")),))
    payload = build_payload(request, stream=True)

    assert payload["messages"][0] == {"role": "system", "content": "Be brief."}  # nosec B101 - pytest assert in tests
    assert payload["messages"][1]["images"] == ["aGk="]  # nosec B101 - pytest assert in tests
    assert payload["options"] == {"temperature": 0.0, "top_p": 0.9, "num_predict": 64}  # nosec B101 - pytest assert in tests
    assert payload["format"] == "json" and payload["stream"] is True  # nosec B101 - pytest assert in tests


def test_tool_turns_round_trip_into_ollama_messages():
    call = ToolCall(id="call_0", function_name="get_weather", arguments='{"location": "Paris"}')
    request = make_request(MODEL, "Weather?", tools=(WEATHER_TOOL,))
    request = replace(
        request,
        messages=request.messages
        + (
            InputMessage.assistant(tool_calls=[call]),
            InputMessage.tool([ToolResult("call_0", "get_weather", "18C and sunny")]),
        ),
    )
    msgs = build_payload(request, stream=False)["messages"]

    assert msgs[1]["tool_calls"] == [{"function": {"name": "get_weather", "arguments": {"location": "Paris"}}}]  # nosec B101 - pytest assert in tests
    assert msgs[2] == {"role": "tool", "content": "18C and sunny", "tool_name": "get_weather"}  # nosec B101 - pytest assert in tests


def test_streamed_text_and_done_chunk():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        body = ndjson(
            {"message": {"role": "assistant", "content": "Hel"}, "done": False},
            {"message": {"role": "assistant", "content": "lo"}, "done": False},
            {"message": {"role": "assistant", "content": ""}, "done": True, "done_reason": "stop", "prompt_eval_count": 7, "eval_count": 2},
        )
        return httpx.Response(200, content=body)

    stream = _provider(handler).create_chat_completion_stream(make_request(MODEL))
    deltas = drain(stream)

    assert seen["path"] == "/api/chat" and seen["body"]["stream"] is True  # nosec B101 - pytest assert in tests
    assert [d.content for d in deltas] == ["Hel", "lo", ""]  # nosec B101 - pytest assert in tests
    assert deltas[-1].finish_reason is FinishReason.STOP  # nosec B101 - pytest assert in tests
    assert deltas[-1].usage.total_tokens == 9  # nosec B101 - pytest assert in tests


def test_streamed_tool_calls_get_sequential_ids():
    def handler(request: httpx.Request) -> httpx.Response:
        body = ndjson(
            {
                "message": {
                    "role": "assistant",
                    "content": "",
                    "tool_calls": [{"function": {"name": "get_weather", "arguments": {"location": "Paris"}}}],
                },
                "done": False,
            },
            {"message": {"role": "assistant", "content": ""}, "done": True, "done_reason": "stop"},
        )
        return httpx.Response(200, content=body)

    deltas = drain(_provider(handler).create_chat_completion_stream(make_request(MODEL, tools=(WEATHER_TOOL,))))

    assert [(c.id, c.arguments) for c in deltas[0].tool_calls] == [("call_0", '{"location": "Paris"}')]  # nosec B101 - pytest assert in tests
    assert deltas[-1].finish_reason is FinishReason.TOOL_CALLS  # nosec B101 - pytest assert in tests


def test_error_line_surfaces_as_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=ndjson({"error": "model 'nope' not found"}))

    stream = _provider(handler).create_chat_completion_stream(make_request(MODEL))
    with pytest.raises(ProviderError) as exc:
        stream.receive_next()
    assert exc.value.code is ErrorCode.NOT_FOUND  # nosec B101 - pytest assert in tests
    assert isinstance(exc.value.raw, OllamaResponseError)  # nosec B101 - pytest assert in tests


def test_http_error_status_is_classified():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "busy"})

    with pytest.raises(ProviderError) as exc:
        _provider(handler).create_chat_completion(make_request(MODEL))
    assert exc.value.code is ErrorCode.UNAVAILABLE and exc.value.status == 503  # nosec B101 - pytest assert in tests


def test_non_streaming_chat_matches_stream_shape():
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content)["stream"] is False  # nosec B101 - pytest assert in tests
        return httpx.Response(
            200,
            json={
                "message": {
                    "role": "assistant",
                    "content": "",
                    "tool_calls": [{"function": {"name": "get_weather", "arguments": {"location": "Paris"}}}],
                },
                "done": True,
                "done_reason": "stop",
                "prompt_eval_count": 10,
                "eval_count": 4,
            },
        )

    resp = _provider(handler).create_chat_completion(make_request(MODEL, tools=(WEATHER_TOOL,)))
    assert resp.finish_reason is FinishReason.TOOL_CALLS  # nosec B101 - pytest assert in tests
    assert resp.tool_calls[0].id == "call_0"  # nosec B101 - pytest assert in tests
    assert resp.tool_calls[0].arguments == '{"location": "Paris"}'  # nosec B101 - pytest assert in tests
    assert resp.usage.total_tokens == 14  # nosec B101 - pytest assert in tests


def test_cancellation_stops_a_slow_stream():
    more = threading.Event()

    def chunks():
        yield json.dumps({"message": {"content": "a"}, "done": False}).encode() + b"\n"
        more.wait(5)
        yield json.dumps({"message": {"content": "b"}, "done": False}).encode() + b"\n"

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=chunks())

    token = CancellationToken()
    stream = _provider(handler).create_chat_completion_stream(make_request(MODEL), cancellation_token=token)
    assert stream.receive_next().content == "a"  # nosec B101 - pytest assert in tests
    token.cancel("user abort")
    more.set()
    with pytest.raises(ProviderError) as exc:
        stream.receive_next()
    assert exc.value.code is ErrorCode.CANCELLED  # nosec B101 - pytest assert in tests
    stream.close()


def test_close_after_completion_is_quiet():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=ndjson({"message": {"content": "x"}, "done": True}))

    stream = _provider(handler).create_chat_completion_stream(make_request(MODEL))
    assert stream.receive_next().finish_reason is FinishReason.STOP  # nosec B101 - pytest assert in tests
    stream.close()
    stream.close()
    with pytest.raises(EndOfStream):
        stream.receive_next()


def test_bridged_streams_detach_from_a_shared_token():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=ndjson({"message": {"content": "x"}, "done": True}))

    provider = _provider(handler)
    app_token = CancellationToken()
    for _ in range(5):
        drain(provider.create_chat_completion_stream(make_request(MODEL), cancellation_token=app_token))

    assert app_token._children == []  # nosec B101 - pytest assert in tests
    assert not app_token.cancelled  # nosec B101 - pytest assert in tests

def test_invalid_host_is_a_configuration_error():
    with pytest.raises(ProviderError) as exc:
        OllamaProvider("not a url")
    assert exc.value.code is ErrorCode.CONFIGURATION  # nosec B101 - pytest assert in tests


def test_host_and_models_resolve_from_environment(monkeypatch):
    monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434/")
    provider = OllamaProvider(allowed_models=["phi4"])
    assert provider.host == "http://gpu-box:11434"  # nosec B101 - pytest assert in tests
    assert provider.supported_models() == ("phi4",)  # nosec B101 - pytest assert in tests


def test_unlisted_model_is_rejected_before_any_request():
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must not run
        raise AssertionError("network call made")

    with pytest.raises(ProviderError) as exc:
        _provider(handler).create_chat_completion(make_request("llama-unknown"))
    assert exc.value.code is ErrorCode.UNSUPPORTED  # nosec B101 - pytest assert in tests


def test_transport_chat_pushes_each_line():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"\n" + ndjson({"message": {"content": "a"}}, {"done": True}))

    client = httpx.Client(base_url="http://x", transport=httpx.MockTransport(handler))
    got = []
    OllamaTransport("http://x", client=client).chat({"model": MODEL}, got.append)
    assert got == [{"message": {"content": "a"}}, {"done": True}]  # nosec B101 - pytest assert in tests

"""End-to-end tool-call round trip through the public surface.

A weather question is streamed, the model's fragmented tool call is
reassembled and reported once through the handler, and the tool result is
sent back on a follow-up turn.
"""
from __future__ import annotations

import json

import httpx

from unillm import CallbackStreamHandler, FinishReason, InputMessage, ToolResult, stream_chat_completion
from unillm.ollama import OllamaProvider
from unillm.openai import OpenAIProvider
from unillm.tests.fakes import (
    FakeOpenAIClient,
    FakeSdkStream,
    WEATHER_TOOL,
    ndjson,
    openai_chunk,
    openai_completion,
    openai_fragment,
    weather_request,
)


def _recording_handler():
    seen = {"tokens": [], "tool_calls": [], "complete": [], "errors": []}
    handler = CallbackStreamHandler(
        token=seen["tokens"].append,
        tool_call=seen["tool_calls"].append,
        complete=seen["complete"].append,
        error=seen["errors"].append,
    )
    return seen, handler


def test_weather_tool_call_round_trip_over_openai():
    stream = FakeSdkStream(
        [
            openai_chunk("Let me look that up. "),
            openai_chunk(tool_calls=[openai_fragment(0, "call_abc", "get_weather", '{"loc')]),
            openai_chunk(tool_calls=[openai_fragment(0, None, None, 'ation": "Par')]),
            openai_chunk(tool_calls=[openai_fragment(0, None, None, 'is"}')]),
            openai_chunk(finish="tool_calls"),
        ]
    )
    client = FakeOpenAIClient(stream=stream, completion=openai_completion("It is 18C and sunny in Paris."))
    provider = OpenAIProvider(client=client)
    seen, handler = _recording_handler()

    message = stream_chat_completion(provider, weather_request("gpt-4o"), handler)

    assert seen["errors"] == []  # nosec B101 - pytest assert in tests
    assert "".join(seen["tokens"]) == "Let me look that up. "  # nosec B101 - pytest assert in tests
    (call,) = seen["tool_calls"]
    assert (call.id, call.function_name) == ("call_abc", "get_weather")  # nosec B101 - pytest assert in tests
    assert call.parsed_arguments() == {"location": "Paris"}  # nosec B101 - pytest assert in tests
    assert seen["complete"] == [message] and message.tool_calls == (call,)  # nosec B101 - pytest assert in tests
    assert stream.close_calls == 1  # nosec B101 - pytest assert in tests

    request = weather_request("gpt-4o")
    follow_up = type(request)(
        model=request.model,
        tools=(WEATHER_TOOL,),
        messages=request.messages
        + (
            InputMessage.assistant(message.content, tool_calls=message.tool_calls),
            InputMessage.tool([ToolResult(call.id, call.function_name, "18C, sunny")]),
        ),
    )
    answer = provider.create_chat_completion(follow_up)

    sent = client.calls[-1]["messages"]
    assert sent[-1] == {"role": "tool", "tool_call_id": "call_abc", "content": "18C, sunny"}  # nosec B101 - pytest assert in tests
    assert answer.finish_reason is FinishReason.STOP  # nosec B101 - pytest assert in tests
    assert answer.content == "It is 18C and sunny in Paris."  # nosec B101 - pytest assert in tests


def test_weather_tool_call_round_trip_over_ollama():
    bodies = []

    def handler_fn(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(
            200,
            content=ndjson(
                {
                    "message": {
                        "role": "assistant",
                        "content": "",
                        "tool_calls": [{"function": {"name": "get_weather", "arguments": {"location": "Paris"}}}],
                    },
                    "done": False,
                },
                {"message": {"role": "assistant", "content": ""}, "done": True, "done_reason": "stop"},
            ),
        )

    http = httpx.Client(base_url="http://ollama.test", transport=httpx.MockTransport(handler_fn))
    provider = OllamaProvider("http://ollama.test", http_client=http)
    seen, handler = _recording_handler()

    message = stream_chat_completion(provider, weather_request("llama3.2:3b"), handler)

    assert seen["errors"] == []  # nosec B101 - pytest assert in tests
    assert [c.id for c in seen["tool_calls"]] == ["call_0"]  # nosec B101 - pytest assert in tests
    assert message.tool_calls[0].parsed_arguments() == {"location": "Paris"}  # nosec B101 - pytest assert in tests
    assert bodies[0]["tools"][0]["function"]["name"] == "get_weather"  # nosec B101 - pytest assert in tests

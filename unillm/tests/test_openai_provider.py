"""OpenAI provider: parameter translation, non-streaming parity and setup errors."""
from __future__ import annotations

from types import SimpleNamespace as NS

import openai
import pytest

from unillm.base.errors import ErrorCode, ProviderError
from unillm.base.models import FinishReason, ImagePart, InputMessage, ToolCall, ToolResult
from unillm.openai import OpenAIProvider
from unillm.openai.helpers import build_params

from .fakes import (
    FakeOpenAIClient,
    FakeSdkStream,
    WEATHER_TOOL,
    drain,
    make_request,
    openai_chunk,
    openai_completion,
    openai_fragment,
    weather_request,
)


def test_params_carry_defaults_and_optional_fields():
    params = build_params(make_request("gpt-4o", system_prompt="sys", max_tokens=32), stream=True)

    assert params["messages"][0] == {"role": "system", "content": "sys"}  # nosec B101 - pytest assert in tests
    assert params["messages"][1] == {"role": "user", "content": [{"type": "text", "text": "Hello"}]}  # nosec B101 - pytest assert in tests
    assert params["n"] == 1 and params["top_p"] == 1.0 and params["stream"] is True  # nosec B101 - pytest assert in tests
    assert params["max_completion_tokens"] == 32  # nosec B101 - pytest assert in tests
    assert "temperature" not in params and "reasoning_effort" not in params  # nosec B101 - pytest assert in tests


def test_reasoning_model_json_mode_and_explicit_zero_temperature():
    params = build_params(make_request("o3-mini", temperature=0.0, json_mode=True), stream=False)

    assert params["reasoning_effort"] == "high"  # nosec B101 - pytest assert in tests
    assert params["temperature"] == 0.0  # nosec B101 - pytest assert in tests
    assert params["response_format"] == {"type": "json_object"}  # nosec B101 - pytest assert in tests


def test_images_and_tool_turns_are_translated():
    call = ToolCall(id="call_1", function_name="get_weather", arguments='{"location": "Paris"}')
    request = make_request("gpt-4o", tools=(WEATHER_TOOL,))
    request = type(request)(
        model=request.model,
        tools=request.tools,
        messages=(
            InputMessage.user("Look", ImagePart(data="aGk=", media_type="image/png")),
            InputMessage.assistant(tool_calls=[call]),
            InputMessage.tool([ToolResult("call_1", "get_weather", "sunny")]),
        ),
    )
    params = build_params(request, stream=False)
    user, assistant, tool = params["messages"]

    assert user["content"][1] == {"type": "image_url", "image_url": {"url": "data:image/png;base64,aGk=", "detail": "high"}}  # nosec B101 - pytest assert in tests
    assert assistant["tool_calls"][0]["function"] == {"name": "get_weather", "arguments": '{"location": "Paris"}'}  # nosec B101 - pytest assert in tests
    assert tool == {"role": "tool", "tool_call_id": "call_1", "content": "sunny"}  # nosec B101 - pytest assert in tests
    assert params["tools"][0]["function"]["parameters"]["required"] == ["location"]  # nosec B101 - pytest assert in tests


def test_non_streaming_response_matches_streamed_outcome():
    call = ToolCall(id="call_1", function_name="get_weather", arguments='{"location": "Paris"}')
    stream = FakeSdkStream(
        [
            openai_chunk(tool_calls=[openai_fragment(0, "call_1", "get_weather", '{"location"')]),
            openai_chunk(tool_calls=[openai_fragment(0, None, None, ': "Paris"}')]),
            openai_chunk(finish="tool_calls"),
        ]
    )
    client = FakeOpenAIClient(completion=openai_completion(None, [call], finish="tool_calls"), stream=stream)
    provider = OpenAIProvider(client=client)

    whole = provider.create_chat_completion(weather_request("gpt-4o"))
    deltas = drain(provider.create_chat_completion_stream(weather_request("gpt-4o")))

    streamed_calls = tuple(c for d in deltas for c in d.tool_calls)
    assert whole.tool_calls == streamed_calls  # nosec B101 - pytest assert in tests
    assert whole.finish_reason is deltas[-1].finish_reason is FinishReason.TOOL_CALLS  # nosec B101 - pytest assert in tests
    assert whole.usage.total_tokens == 17  # nosec B101 - pytest assert in tests
    assert [c["stream"] for c in client.calls] == [False, True]  # nosec B101 - pytest assert in tests


def test_stop_with_tool_calls_in_a_whole_response_becomes_tool_calls():
    call = ToolCall(id="call_9", function_name="f", arguments="{}")
    provider = OpenAIProvider(client=FakeOpenAIClient(completion=openai_completion("", [call], finish="stop")))
    assert provider.create_chat_completion(make_request("gpt-4o")).finish_reason is FinishReason.TOOL_CALLS  # nosec B101 - pytest assert in tests


def test_unknown_model_is_rejected_before_the_vendor_call():
    client = FakeOpenAIClient(completion=openai_completion("x"))
    with pytest.raises(ProviderError) as exc:
        OpenAIProvider(client=client).create_chat_completion(make_request("gpt-2"))
    assert exc.value.code is ErrorCode.UNSUPPORTED  # nosec B101 - pytest assert in tests
    assert client.calls == []  # nosec B101 - pytest assert in tests


def test_invalid_request_is_a_validation_error():
    client = FakeOpenAIClient(completion=openai_completion("x"))
    with pytest.raises(ProviderError) as exc:
        OpenAIProvider(client=client).create_chat_completion(make_request("gpt-4o", temperature=7.5))
    assert exc.value.code is ErrorCode.VALIDATION  # nosec B101 - pytest assert in tests
    assert client.calls == []  # nosec B101 - pytest assert in tests


def test_vendor_errors_are_classified_with_detail():
    err = Exception("Rate limit reached for requests")
    err.status_code = 429
    err.code = "rate_limit_exceeded"
    provider = OpenAIProvider(client=FakeOpenAIClient(error=err))

    with pytest.raises(ProviderError) as exc:
        provider.create_chat_completion(make_request("gpt-4o"))
    assert exc.value.code is ErrorCode.RATE_LIMIT  # nosec B101 - pytest assert in tests
    assert exc.value.vendor_code == "rate_limit_exceeded" and exc.value.raw is err  # nosec B101 - pytest assert in tests
    assert exc.value.retryable  # nosec B101 - pytest assert in tests


def test_stream_open_failure_raises_provider_error():
    err = Exception("Incorrect API key provided")
    err.status_code = 401
    provider = OpenAIProvider(client=FakeOpenAIClient(error=err))
    with pytest.raises(ProviderError) as exc:
        provider.create_chat_completion_stream(make_request("gpt-4o"))
    assert exc.value.code is ErrorCode.AUTH  # nosec B101 - pytest assert in tests


def test_missing_api_key_is_a_configuration_error():
    with pytest.raises(ProviderError) as exc:
        OpenAIProvider()
    assert exc.value.code is ErrorCode.CONFIGURATION  # nosec B101 - pytest assert in tests


def test_key_and_base_url_resolve_from_environment(monkeypatch):
    built = {}
    monkeypatch.setattr(openai, "OpenAI", lambda **kw: built.update(kw) or NS())
    monkeypatch.setenv("OPENAI_API_KEY", "sk-live-abc")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://gateway.internal/v1/")

    OpenAIProvider()
    assert built == {"api_key": "sk-live-abc", "base_url": "https://gateway.internal/v1"}  # nosec B101 - pytest assert in tests


def test_placeholder_key_is_ignored(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "changeme")
    with pytest.raises(ProviderError) as exc:
        OpenAIProvider()
    assert exc.value.code is ErrorCode.CONFIGURATION  # nosec B101 - pytest assert in tests


def test_compatible_endpoint_must_be_a_url():
    with pytest.raises(ProviderError) as exc:
        OpenAIProvider.compatible("sk-1", "ftp://nope")
    assert exc.value.code is ErrorCode.CONFIGURATION  # nosec B101 - pytest assert in tests


def test_azure_builds_an_azure_client(monkeypatch):
    built = {}
    azure_client = NS(kind="azure")
    monkeypatch.setattr(openai, "AzureOpenAI", lambda **kw: built.update(kw) or azure_client)

    provider = OpenAIProvider.azure("az-key", "https://res.openai.azure.com/", allowed_models=["my-deployment"])

    assert built == {  # nosec B101 - pytest assert in tests
        "api_key": "az-key",
        "azure_endpoint": "https://res.openai.azure.com",
        "api_version": "2023-05-15",
    }
    assert provider.supported_models() == ("my-deployment",)  # nosec B101 - pytest assert in tests
    assert provider._client is azure_client  # nosec B101 - pytest assert in tests


def test_azure_rejects_bad_endpoint_and_missing_key():
    with pytest.raises(ProviderError):
        OpenAIProvider.azure("az-key", "not a url")
    with pytest.raises(ProviderError) as exc:
        OpenAIProvider.azure("", "https://res.openai.azure.com")
    assert exc.value.code is ErrorCode.CONFIGURATION  # nosec B101 - pytest assert in tests


def test_chat_logs_start_and_end(log_records):
    provider = OpenAIProvider(client=FakeOpenAIClient(completion=openai_completion("hi")))
    provider.create_chat_completion(make_request("gpt-4o"))
    events = [r.getMessage() for r in log_records]
    assert any('"event": "chat.start"' in e for e in events)  # nosec B101 - pytest assert in tests
    assert any('"event": "chat.end"' in e and '"finish_reason": "stop"' in e for e in events)  # nosec B101 - pytest assert in tests

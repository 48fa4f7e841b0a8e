"""Exception classification into normalized error codes."""
from __future__ import annotations

from types import SimpleNamespace as NS

import pytest

from unillm.base.errors import ErrorCode, ProviderError, classify_exception, to_provider_error


class _StatusError(Exception):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


@pytest.mark.parametrize(
    "status, expected",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (503, ErrorCode.UNAVAILABLE),
        (529, ErrorCode.UNAVAILABLE),
    ],
)
def test_http_status_mapping(status, expected):
    assert classify_exception(_StatusError("x", status)) is expected  # nosec B101 - pytest assert in tests


def test_status_is_read_from_an_attached_response():
    exc = Exception("boom")
    exc.response = NS(status_code=504)
    assert classify_exception(exc) is ErrorCode.TIMEOUT  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Request timed out", ErrorCode.TIMEOUT),
        ("Invalid API key", ErrorCode.AUTH),
        ("rate limit hit", ErrorCode.RATE_LIMIT),
        ("connection refused", ErrorCode.UNAVAILABLE),
        ("something odd", ErrorCode.UNKNOWN),
    ],
)
def test_message_heuristics(message, expected):
    assert classify_exception(RuntimeError(message)) is expected  # nosec B101 - pytest assert in tests


def test_timeout_exceptions_are_timeouts():
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101 - pytest assert in tests


def test_anthropic_style_body_supplies_vendor_code_and_message():
    exc = _StatusError("Error code: 529", 529)
    exc.body = {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}

    err = to_provider_error(exc, provider="anthropic", model="claude-3-5-haiku-latest")

    assert err.code is ErrorCode.UNAVAILABLE and err.retryable  # nosec B101 - pytest assert in tests
    assert err.vendor_code == "overloaded_error" and err.message == "Overloaded"  # nosec B101 - pytest assert in tests
    assert err.status == 529 and err.raw is exc  # nosec B101 - pytest assert in tests


def test_provider_errors_pass_through_unchanged():
    original = ProviderError(code=ErrorCode.PROTOCOL, message="bad finish", provider="openai")
    assert to_provider_error(original, provider="other") is original  # nosec B101 - pytest assert in tests


def test_validation_errors_are_not_retryable():
    err = to_provider_error(_StatusError("bad", 400), provider="openai")
    assert not err.retryable  # nosec B101 - pytest assert in tests

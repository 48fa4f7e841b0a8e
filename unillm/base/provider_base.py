"""
Shared orchestration for provider adapters.

``BaseProvider`` owns the parts of a call that are identical across vendors:

* allow-list check (``ErrorCode.UNSUPPORTED``) and request validation
  (``ErrorCode.VALIDATION``) before any network call;
* cancellation checks around the blocking vendor call;
* wrapping SDK exceptions into ``ProviderError`` with vendor detail;
* ``chat.*`` / ``stream.open`` structured logging.

Subclasses implement ``_complete`` (one vendor call returning a normalized
response) and ``_open_stream`` (returning a ``NormalizedStream``). Instances
keep no per-request state and may be shared across threads.
"""
from __future__ import annotations

import logging
import time
from typing import Iterable, Optional, Tuple

import httpx

from .cancellation import CancellationToken
from .dto.chat import validate_request
from .errors import ErrorCode, ProviderError, to_provider_error
from .logging import LogContext, get_logger, normalized_log_event
from .models import ChatCompletionRequest, ChatCompletionResponse
from .streaming.normalized_stream import NormalizedStream


class BaseProvider:
    """Common request surface for the concrete providers."""

    provider_name: str = "base"

    def __init__(self, *, allowed_models: Iterable[str], logger: Optional[logging.Logger] = None) -> None:
        self._allowed_models: Tuple[str, ...] = tuple(allowed_models)
        self._logger = logger or get_logger(f"unillm.{self.provider_name}")

    # ------------------------------------------------------------ public API
    def supported_models(self) -> Tuple[str, ...]:
        return self._allowed_models

    def create_chat_completion(
        self,
        request: ChatCompletionRequest,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> ChatCompletionResponse:
        """Run one non-streaming completion.

        Raises:
            ProviderError: unsupported model, validation, cancellation, or a
                wrapped vendor/transport failure.
        """
        self._prepare(request)
        ctx = LogContext(provider=self.provider_name, model=request.model)
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", emitted=False)
        t0 = time.perf_counter()
        self._check_cancelled(cancellation_token, request.model)
        try:
            response = self._complete(request)
        except Exception as exc:
            err = to_provider_error(exc, provider=self.provider_name, model=request.model)
            self._log_error("chat.error", ctx, err, t0)
            if err is exc:
                raise
            raise err from exc
        self._check_cancelled(cancellation_token, request.model)
        ctx.response_id = response.id
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=bool(response.content or response.tool_calls),
            tokens=response.usage,
            finish_reason=response.finish_reason.value if response.finish_reason else None,
            duration_ms=(time.perf_counter() - t0) * 1000.0,
        )
        return response

    def create_chat_completion_stream(
        self,
        request: ChatCompletionRequest,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> NormalizedStream:
        """Open a normalized stream for ``request``.

        Failures to open (including the vendor rejecting the request) raise
        ``ProviderError``; failures after that surface from ``receive_next``.
        """
        self._prepare(request)
        self._check_cancelled(cancellation_token, request.model)
        t0 = time.perf_counter()
        try:
            return self._open_stream(request, cancellation_token)
        except Exception as exc:
            err = to_provider_error(exc, provider=self.provider_name, model=request.model)
            ctx = LogContext(provider=self.provider_name, model=request.model)
            self._log_error("stream.open.error", ctx, err, t0)
            if err is exc:
                raise
            raise err from exc

    # ----------------------------------------------------------------- hooks
    def _complete(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        raise NotImplementedError

    def _open_stream(
        self, request: ChatCompletionRequest, cancellation_token: Optional[CancellationToken]
    ) -> NormalizedStream:
        raise NotImplementedError

    # --------------------------------------------------------------- helpers
    def _prepare(self, request: ChatCompletionRequest) -> None:
        if request.model not in self._allowed_models:
            raise ProviderError(
                code=ErrorCode.UNSUPPORTED,
                message=f"model {request.model!r} is not supported by {self.provider_name}",
                provider=self.provider_name,
                model=request.model,
            )
        validate_request(request, provider=self.provider_name)

    def _check_cancelled(self, token: Optional[CancellationToken], model: str) -> None:
        if token is not None and token.cancelled:
            raise ProviderError(
                code=ErrorCode.CANCELLED,
                message=token.reason or "operation cancelled",
                provider=self.provider_name,
                model=model,
            )

    @classmethod
    def _configuration_error(cls, message: str, raw: Optional[Exception] = None) -> ProviderError:
        return ProviderError(
            code=ErrorCode.CONFIGURATION,
            message=message,
            provider=cls.provider_name,
            raw=raw,
        )

    @classmethod
    def _validate_url(cls, value: str, what: str) -> str:
        """Return ``value`` when it is an absolute http(s) URL, else raise CONFIGURATION."""
        try:
            url = httpx.URL(value)
        except (httpx.InvalidURL, TypeError) as exc:
            raise cls._configuration_error(f"invalid {what} {value!r}: {exc}", exc) from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise cls._configuration_error(f"invalid {what} {value!r}: expected an http(s) URL with a host")
        return str(value).rstrip("/")

    def _log_error(self, event: str, ctx: LogContext, err: ProviderError, t0: float) -> None:
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="error",
            error_code=err.code.value,
            emitted=False,
            level=logging.WARNING,
            error=err.message,
            vendor_code=err.vendor_code,
            status=err.status,
            duration_ms=(time.perf_counter() - t0) * 1000.0,
        )


__all__ = ["BaseProvider"]

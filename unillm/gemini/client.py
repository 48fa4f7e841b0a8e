"""GeminiProvider adapter.

Uses ``google-generativeai`` (``GenerativeModel.generate_content``) for both
single-shot and streamed completions. A ``GenerativeModel`` is built per
request because system instruction, tools and generation config are
model-level settings in this SDK.

The SDK keeps its API key in process-wide state (``genai.configure``); every
``GeminiProvider`` in a process therefore shares the most recently configured
key.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

import google.generativeai as genai

from ..base.cancellation import CancellationToken
from ..base.models import ChatCompletionRequest, ChatCompletionResponse
from ..base.provider_base import BaseProvider
from ..config import get_provider_config
from ..config.defaults import GEMINI_SUPPORTED_MODELS
from .helpers import build_contents, build_model_kwargs, response_from_generation
from .stream import GeminiChatStream

ModelFactory = Callable[..., Any]


class GeminiProvider(BaseProvider):
    """Gemini provider for chat, streaming and function calling.

    Args:
        api_key: API key; falls back to configuration/environment
            (``GEMINI_API_KEY`` or ``GOOGLE_API_KEY``).
        allowed_models: Override of the model allow-list.
        model_factory: Callable building a model from ``GenerativeModel``
            keyword arguments; defaults to ``genai.GenerativeModel``. When
            given, the SDK is not configured (tests).
    """

    provider_name = "gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        allowed_models: Optional[Iterable[str]] = None,
        model_factory: Optional[ModelFactory] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(allowed_models=allowed_models or GEMINI_SUPPORTED_MODELS, logger=logger)
        if model_factory is not None:
            self._model_factory = model_factory
            return
        cfg = get_provider_config(self.provider_name, {"api_key": api_key})
        if not cfg.get("api_key"):
            raise self._configuration_error("missing API key (set GEMINI_API_KEY or pass api_key)")
        genai.configure(api_key=cfg["api_key"])
        self._model_factory = genai.GenerativeModel

    def _model(self, request: ChatCompletionRequest) -> Any:
        return self._model_factory(**build_model_kwargs(request))

    def _complete(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        resp = self._model(request).generate_content(build_contents(request), stream=False)
        return response_from_generation(resp, model=request.model)

    def _open_stream(
        self, request: ChatCompletionRequest, cancellation_token: Optional[CancellationToken]
    ) -> GeminiChatStream:
        resp = self._model(request).generate_content(build_contents(request), stream=True)
        return GeminiChatStream(
            resp,
            model=request.model,
            logger=self._logger,
            cancellation_token=cancellation_token,
        )


__all__ = ["GeminiProvider"]

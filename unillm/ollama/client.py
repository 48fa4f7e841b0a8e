"""Ollama provider adapter.

Purpose:
    Implements chat and streaming generation against the local Ollama HTTP
    API (default ``http://localhost:11434``) through ``/api/chat``.

External dependencies:
    HTTP client only (``httpx``). No SDK or API key is required since Ollama
    is a local daemon.

Streaming:
    The transport is push-style (one callback per NDJSON line) and runs on a
    worker thread; :class:`OllamaChatStream` bridges it back into the pull
    contract with a bounded queue.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.models import ChatCompletionRequest, ChatCompletionResponse
from ..base.provider_base import BaseProvider
from ..config import get_provider_config
from ..config.defaults import OLLAMA_DEFAULT_HOST, OLLAMA_SUPPORTED_MODELS
from .helpers import build_payload, response_from_body
from .stream import OllamaChatStream
from .transport import OllamaTransport


class OllamaProvider(BaseProvider):
    """Adapter for a local or remote Ollama daemon.

    Args:
        host: Daemon base URL; resolved from configuration (``OLLAMA_HOST``,
            config file) when omitted. Must be an absolute http(s) URL.
        allowed_models: Override of the model allow-list; local catalogues
            differ per machine.
        http_client: Optional ``httpx.Client`` used instead of the shared pool.
    """

    provider_name = "ollama"

    def __init__(
        self,
        host: Optional[str] = None,
        *,
        allowed_models: Optional[Iterable[str]] = None,
        http_client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        cfg = get_provider_config(self.provider_name, {"host": host})
        models = allowed_models or cfg.get("allowed_models") or OLLAMA_SUPPORTED_MODELS
        super().__init__(allowed_models=models, logger=logger)
        raw_host = str(cfg.get("host") or OLLAMA_DEFAULT_HOST).strip()
        self._host = self._validate_url(raw_host, "host")
        self._transport = OllamaTransport(self._host, client=http_client)

    @property
    def host(self) -> str:
        return self._host

    def _complete(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        body = self._transport.chat_once(build_payload(request, stream=False))
        return response_from_body(body, model=request.model)

    def _open_stream(
        self, request: ChatCompletionRequest, cancellation_token: Optional[CancellationToken]
    ) -> OllamaChatStream:
        return OllamaChatStream(
            self._transport,
            build_payload(request, stream=True),
            model=request.model,
            logger=self._logger,
            cancellation_token=cancellation_token,
        )


__all__ = ["OllamaProvider"]

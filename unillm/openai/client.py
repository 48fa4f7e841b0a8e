"""OpenAI-compatible provider.

Wraps the official ``openai`` SDK (``OpenAI`` / ``AzureOpenAI`` clients) behind
the canonical request surface. Request translation and response building
live in :mod:`unillm.openai.helpers`; the stream normalizer in
:mod:`unillm.openai.stream`.

Construction performs no network I/O. Credentials resolve from explicit
arguments first, then ``get_provider_config("openai")`` (environment /
config file).
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import openai

from ..base.cancellation import CancellationToken
from ..base.models import ChatCompletionRequest, ChatCompletionResponse
from ..base.provider_base import BaseProvider
from ..config import get_provider_config
from ..config.defaults import AZURE_OPENAI_DEFAULT_API_VERSION, OPENAI_SUPPORTED_MODELS
from .helpers import build_params, response_from_completion
from .stream import OpenAIChatStream

__all__ = ["OpenAIProvider"]


class OpenAIProvider(BaseProvider):
    """Adapter for OpenAI and OpenAI-compatible Chat Completions endpoints.

    Args:
        api_key: API key; falls back to configuration/environment.
        base_url: Optional endpoint override (proxies, compatible gateways).
        allowed_models: Override of the model allow-list.
        client: Pre-built SDK client (mainly for tests); skips credential
            resolution.
    """

    provider_name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        allowed_models: Optional[Iterable[str]] = None,
        client: Any = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(allowed_models=allowed_models or OPENAI_SUPPORTED_MODELS, logger=logger)
        if client is not None:
            self._client = client
            return
        cfg = get_provider_config(self.provider_name, {"api_key": api_key, "base_url": base_url})
        if not cfg.get("api_key"):
            raise self._configuration_error("missing API key (set OPENAI_API_KEY or pass api_key)")
        endpoint = self._validate_url(cfg["base_url"], "base_url") if cfg.get("base_url") else None
        self._client = openai.OpenAI(api_key=cfg["api_key"], base_url=endpoint)

    @classmethod
    def compatible(cls, api_key: str, base_url: str, **kwargs: Any) -> "OpenAIProvider":
        """Adapter for any OpenAI-compatible server at ``base_url``."""
        return cls(api_key=api_key, base_url=base_url, **kwargs)

    @classmethod
    def azure(
        cls,
        api_key: str,
        endpoint: str,
        *,
        api_version: str = AZURE_OPENAI_DEFAULT_API_VERSION,
        allowed_models: Optional[Iterable[str]] = None,
    ) -> "OpenAIProvider":
        """Adapter for an Azure OpenAI resource.

        ``request.model`` is used as the Azure deployment name.
        """
        azure_endpoint = cls._validate_url(endpoint, "azure endpoint")
        if not api_key:
            raise cls._configuration_error("missing Azure OpenAI API key")
        client = openai.AzureOpenAI(
            api_key=api_key,
            azure_endpoint=azure_endpoint,
            api_version=api_version,
        )
        return cls(allowed_models=allowed_models, client=client)

    def _complete(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        resp = self._client.chat.completions.create(**build_params(request, stream=False))
        return response_from_completion(resp, model=request.model)

    def _open_stream(
        self, request: ChatCompletionRequest, cancellation_token: Optional[CancellationToken]
    ) -> OpenAIChatStream:
        sdk_stream = self._client.chat.completions.create(**build_params(request, stream=True))
        return OpenAIChatStream(
            sdk_stream,
            model=request.model,
            logger=self._logger,
            cancellation_token=cancellation_token,
        )

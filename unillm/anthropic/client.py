"""AnthropicProvider adapter.

Implements the Claude integration on the official ``anthropic`` SDK: the
Messages API (``client.messages.create``) for non-streaming requests and
``client.messages.stream`` for streaming. Two deployments share the same
translation and normalization:

* direct API access with an API key (``AnthropicProvider(api_key=...)``);
* Google Vertex AI (``AnthropicProvider.vertex(credentials, project_id,
  location)``), authenticated with a bearer token minted from
  service-account credentials.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Union

import anthropic

from ..base.cancellation import CancellationToken
from ..base.logging import get_logger
from ..base.models import ChatCompletionRequest, ChatCompletionResponse
from ..base.provider_base import BaseProvider
from ..config import get_provider_config
from ..config.defaults import ANTHROPIC_SUPPORTED_MODELS
from .helpers import build_params, response_from_message
from .stream import AnthropicChatStream
from .vertex import mint_access_token


class AnthropicProvider(BaseProvider):
    """Adapter for Anthropic Claude supporting chat, streaming and tools.

    Args:
        api_key: API key; falls back to configuration/environment
            (``ANTHROPIC_API_KEY`` or ``CLAUDE_API_KEY``).
        allowed_models: Override of the model allow-list.
        client: Pre-built ``anthropic.Anthropic``-compatible client; skips
            credential resolution.
    """

    provider_name = "anthropic"

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        allowed_models: Optional[Iterable[str]] = None,
        client: Any = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(allowed_models=allowed_models or ANTHROPIC_SUPPORTED_MODELS, logger=logger)
        if client is not None:
            self._client = client
            return
        cfg = get_provider_config(self.provider_name, {"api_key": api_key})
        if not cfg.get("api_key"):
            raise self._configuration_error("missing API key (set ANTHROPIC_API_KEY or pass api_key)")
        kwargs: dict = {"api_key": cfg["api_key"]}
        if cfg.get("base_url"):
            kwargs["base_url"] = self._validate_url(cfg["base_url"], "base_url")
        self._client = anthropic.Anthropic(**kwargs)

    @classmethod
    def vertex(
        cls,
        credentials: Union[bytes, str],
        project_id: str,
        location: str,
        *,
        allowed_models: Optional[Iterable[str]] = None,
    ) -> "AnthropicProvider":
        """Build a provider that reaches Claude through Vertex AI.

        Mints an access token from the service-account ``credentials``
        (performs network I/O) and logs a ``vertex.token`` event.

        Raises:
            ProviderError: ``CONFIGURATION`` for invalid credentials or a
                missing project/location.
        """
        if not project_id or not location:
            raise cls._configuration_error("vertex requires both project_id and location")
        logger = get_logger(f"unillm.{cls.provider_name}")
        token = mint_access_token(credentials, logger=logger, project_id=project_id, location=location)
        client = anthropic.AnthropicVertex(
            project_id=project_id,
            region=location,
            access_token=token,
        )
        return cls(allowed_models=allowed_models, client=client, logger=logger)

    def _complete(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        message = self._client.messages.create(**build_params(request))
        return response_from_message(message, model=request.model)

    def _open_stream(
        self, request: ChatCompletionRequest, cancellation_token: Optional[CancellationToken]
    ) -> AnthropicChatStream:
        return AnthropicChatStream(
            self._client.messages.stream(**build_params(request)),
            model=request.model,
            logger=self._logger,
            cancellation_token=cancellation_token,
        )


__all__ = ["AnthropicProvider"]

"""Typed parameter object for provider construction through the factory.

Captures the credential/endpoint settings accepted by provider constructors;
``extra`` carries provider-specific keys (``allowed_models``, ``api_version``).
Pure data container validated by Pydantic v2.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class AdapterParams(BaseModel):
    """Common provider construction parameters.

    Attributes
    ----------
    provider:
        Canonical provider name; dropped before reaching the constructor.
    api_key:
        API key passed straight to the vendor SDK.
    base_url:
        Endpoint override (OpenAI-compatible gateways).
    host:
        Ollama server URL.
    extra:
        Provider-specific constructor keyword arguments.
    """

    provider: Optional[str] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    host: Optional[str] = None
    extra: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["AdapterParams"]

"""Provider Factory utilities.

Purpose
-------
Create provider instances implementing :class:`LLMProvider` from a canonical
name. Provider modules are imported lazily with ``importlib`` so importing the
factory never pulls in vendor SDKs that are not used.

Scope
-----
Supported providers: ``openai``, ``anthropic`` (alias ``claude``),
``gemini`` and ``ollama``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .dto.adapter_params import AdapterParams


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or initialized.

    Failure modes include an unregistered name, a module that fails to import,
    a missing adapter class, or constructor arguments the adapter rejects.
    Configuration problems detected by the adapter itself surface as
    ``ProviderError`` with ``ErrorCode.CONFIGURATION`` instead.
    """


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Shortcut for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


class ProviderFactory:
    """Create provider adapters based on a canonical name (e.g., ``"openai"``)."""

    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "unillm.openai.client", "class": "OpenAIProvider"},
        "anthropic": {"module": "unillm.anthropic.client", "class": "AnthropicProvider"},
        "gemini": {"module": "unillm.gemini.client", "class": "GeminiProvider"},
        "ollama": {"module": "unillm.ollama.client", "class": "OllamaProvider"},
    }

    _ALIASES: Dict[str, str] = {"claude": "anthropic", "google": "gemini"}

    @classmethod
    def create(
        cls,
        provider: str,
        *,
        params: Optional[AdapterParams] = None,
        **kwargs: Any,
    ) -> Any:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            Canonical provider name (e.g., ``"openai"``).
        params:
            Optional :class:`AdapterParams`; explicit ``kwargs`` take precedence.
        **kwargs:
            Adapter constructor keyword arguments.

        Raises
        ------
        UnknownProviderError
            Unknown provider, import failure, missing class, or invalid
            constructor arguments.
        ProviderError
            Raised unchanged by the adapter (e.g. configuration errors).
        """
        merged_kwargs = cls._coerce_params(params, kwargs)

        name = (provider or "").lower().strip()
        name = cls._ALIASES.get(name, name)
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(**merged_kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical provider names in registration order."""
        return tuple(cls._PROVIDERS.keys())

    @staticmethod
    def _coerce_params(params: Optional[AdapterParams], kwargs: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge ``AdapterParams`` into ``kwargs``.

        ``None`` fields are skipped, ``extra`` is flattened into top-level
        constructor kwargs, and explicit ``kwargs`` always win.
        """
        if params is None:
            return dict(kwargs)
        merged: Dict[str, Any] = dict(params.model_dump(exclude_none=True))
        merged.pop("provider", None)
        extra = merged.pop("extra", {}) or {}
        merged |= extra
        merged.update(kwargs)
        return merged


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]

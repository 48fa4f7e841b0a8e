"""Unified configuration layer for providers.

Merge order (later wins):
    1. Built-in defaults (``unillm.config.defaults``)
    2. Optional external config file (JSON or YAML) named by ``UNILLM_CONFIG_FILE``
    3. Environment variables (``<PROVIDER>_MODEL``, ``_API_KEY``, ``_BASE_URL``, ``_HOST``)
       plus credential aliases from ``unillm.config.env``
    4. In-code overrides passed to :func:`get_provider_config`

External config file example::

    openai:
      base_url: https://my-gateway.internal/v1
    ollama:
      host: http://gpu-box:11434
      allowed_models: [llama3.2:3b, phi4]

Placeholder values (see ``is_placeholder``) never override real ones.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    ANTHROPIC_DEFAULT_MODEL,
    GEMINI_DEFAULT_MODEL,
    OLLAMA_DEFAULT_HOST,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_MODEL,
)
from .env import is_placeholder, resolve_provider_key

CONFIG_FILE_ENV = "UNILLM_CONFIG_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL},
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL},
    "gemini": {"model": GEMINI_DEFAULT_MODEL},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL, "host": OLLAMA_DEFAULT_HOST},
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "host": "HOST",
}

_FILE_CACHE: Dict[str, Dict[str, Any]] = {}


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the file named by ``UNILLM_CONFIG_FILE`` (JSON, then YAML)."""
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    if path in _FILE_CACHE:
        return _FILE_CACHE[path]
    p = Path(path)
    if not p.is_file():
        _FILE_CACHE[path] = {}
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE[path] = data
    return data


def clear_config_cache() -> None:
    """Forget cached config files (tests and long-running processes)."""
    _FILE_CACHE.clear()


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val and not is_placeholder(val):
            out[field] = val
    if "api_key" not in out:
        key, _ = resolve_provider_key(provider)
        if key:
            out["api_key"] = key
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider."""
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}
    cfg |= DEFAULTS.get(name, {})
    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg
    cfg |= _env_overrides(name)
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "get_provider_config",
    "get_model",
    "clear_config_cache",
    "DEFAULTS",
    "CONFIG_FILE_ENV",
]

"""unillm.config.env
=================

Environment variable mapping for provider credentials.

``ENV_MAP`` holds the canonical variable per provider; ``ENV_ALIASES`` lists
accepted names in priority order where several exist. Helpers return ``None``
for unknown providers or unset variables and never raise.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
}

ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "anthropic": ("ANTHROPIC_API_KEY", "CLAUDE_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder rather than a secret.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_' (case-insensitive).
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first real key found, else ``(None, None)``."""
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_provider_key",
]

"""Shared fixtures for the unillm test suite.

Everything runs offline: vendor SDK clients are replaced by ``SimpleNamespace``
fakes and Ollama traffic goes through ``httpx.MockTransport``.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from unillm.base.logging import BASE_LOGGER_NAME, get_logger
from unillm.config import clear_config_cache


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep host credentials and config files out of every test."""
    for name in (
        "UNILLM_CONFIG_FILE",
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
        "ANTHROPIC_API_KEY",
        "ANTHROPIC_BASE_URL",
        "CLAUDE_API_KEY",
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "OLLAMA_HOST",
        "OLLAMA_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture()
def log_records() -> Iterator[List[logging.LogRecord]]:
    """Capture records reaching the shared ``unillm`` logger."""
    records: List[logging.LogRecord] = []
    handler = logging.Handler()
    handler.emit = records.append  # type: ignore[method-assign]
    base = get_logger(BASE_LOGGER_NAME)
    base.addHandler(handler)
    try:
        yield records
    finally:
        base.removeHandler(handler)

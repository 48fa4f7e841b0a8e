"""Shared HTTP client pool for providers.

Purpose:
    Provide a thread-safe pool of reusable ``httpx.Client`` instances keyed by
    base URL and purpose, avoiding per-call connection setup.

Lifecycle & cleanup:
    Clients are closed at interpreter exit via ``atexit``; tests may call
    :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

from ...config.defaults import HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS, HTTP_DEFAULT_TIMEOUT_SECONDS

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def default_timeout() -> httpx.Timeout:
    """Read timeout for streaming calls; connect is bounded separately."""
    return httpx.Timeout(HTTP_DEFAULT_TIMEOUT_SECONDS, connect=HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS)


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Base URL set on the client so callers can use relative paths.
        purpose: Short pool discriminator (e.g. ``"ollama"``).
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = default_timeout()
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            with contextlib.suppress(httpx.HTTPError, OSError):
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients", "default_timeout"]

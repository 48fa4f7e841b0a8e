"""
HTTP transport for the Ollama daemon.

``OllamaTransport.chat`` is push-style: it reads the NDJSON response of
``POST /api/chat`` and invokes a callback once per decoded object, returning
when the daemon reports ``done`` or the body ends. The streaming provider
runs it on a worker thread behind :class:`PushStreamBridge`.

Connections come from the shared ``httpx`` pool. Cancelling the token closes
the in-flight response so a blocked read returns immediately.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, Mapping, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.http import get_httpx_client

CHAT_PATH = "/api/chat"

ChunkCallback = Callable[[Dict[str, Any]], None]


class OllamaResponseError(Exception):
    """Error reported by the daemon (HTTP status or an ``error`` field)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(body: Any, fallback: str) -> str:
    if isinstance(body, Mapping) and body.get("error"):
        return str(body["error"])
    return fallback


def _decode_line(line: str) -> Optional[Dict[str, Any]]:
    line = line.strip()
    if not line:
        return None
    try:
        obj = json.loads(line)
    except ValueError as exc:
        raise OllamaResponseError(f"malformed response line: {line[:200]!r}") from exc
    if not isinstance(obj, dict):
        raise OllamaResponseError(f"malformed response line: {line[:200]!r}")
    if obj.get("error"):
        raise OllamaResponseError(str(obj["error"]))
    return obj


class OllamaTransport:
    """Thin ``/api/chat`` client over a pooled ``httpx.Client``.

    Parameters:
        host: Daemon base URL (``http://localhost:11434``).
        client: Optional preconfigured ``httpx.Client`` (tests pass one built
            on ``httpx.MockTransport``).
    """

    def __init__(self, host: str, *, client: Optional[httpx.Client] = None) -> None:
        self.host = host
        self._client = client

    @property
    def client(self) -> httpx.Client:
        return self._client or get_httpx_client(self.host, purpose="ollama")

    def chat(
        self,
        payload: Mapping[str, Any],
        on_chunk: ChunkCallback,
        token: Optional[CancellationToken] = None,
    ) -> None:
        """Stream ``payload`` to ``/api/chat`` and push each decoded chunk.

        Raises:
            OllamaResponseError: HTTP error status, ``error`` line, or a line
                that is not a JSON object.
            httpx.HTTPError: transport failures.
            CancelledError: propagated from ``on_chunk`` when the consumer
                side cancels.
        """
        with self.client.stream("POST", CHAT_PATH, json=dict(payload)) as response:
            if token is not None:
                token.register(response.close)
            if response.status_code >= 400:
                response.read()
                raise OllamaResponseError(
                    _error_message(_safe_json(response), f"HTTP {response.status_code}"),
                    status_code=response.status_code,
                )
            for line in response.iter_lines():
                obj = _decode_line(line)
                if obj is None:
                    continue
                on_chunk(obj)
                if obj.get("done"):
                    return

    def chat_once(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Send a non-streaming request and return the decoded body."""
        body = dict(payload)
        body["stream"] = False
        response = self.client.post(CHAT_PATH, json=body)
        data = _safe_json(response)
        if response.status_code >= 400:
            raise OllamaResponseError(
                _error_message(data, f"HTTP {response.status_code}"),
                status_code=response.status_code,
            )
        if not isinstance(data, dict):
            raise OllamaResponseError("response body is not a JSON object")
        if data.get("error"):
            raise OllamaResponseError(str(data["error"]))
        return data


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


__all__ = ["OllamaTransport", "OllamaResponseError", "CHAT_PATH"]

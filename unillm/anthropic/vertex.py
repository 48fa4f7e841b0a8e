"""
Bearer-token minting for Claude on Google Vertex AI.

A service-account JSON document is exchanged for an OAuth access token with
``google-auth``. The token is short-lived; a new provider must be built once
it expires (no refresh loop is kept here).
"""
from __future__ import annotations

import json
import logging
from typing import Optional, Union

import google.auth.exceptions
import google.auth.transport.requests
from google.oauth2 import service_account

from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, get_logger, log_event
from ..config.defaults import VERTEX_AUTH_SCOPE, VERTEX_TOKEN_LOG_PREFIX
from .helpers import PROVIDER


def _config_error(message: str, raw: Optional[BaseException] = None) -> ProviderError:
    return ProviderError(code=ErrorCode.CONFIGURATION, message=message, provider=PROVIDER, raw=raw)


def mint_access_token(
    credentials: Union[bytes, str],
    *,
    logger: Optional[logging.Logger] = None,
    project_id: Optional[str] = None,
    location: Optional[str] = None,
) -> str:
    """Return an access token for the ``cloud-platform`` scope.

    Parameters:
        credentials: Service-account key file contents (JSON bytes or text).
        logger: Logger for the ``vertex.token`` event.
        project_id: Included in the log event only.
        location: Included in the log event only.

    Raises:
        ProviderError: ``CONFIGURATION`` when the bytes are not a valid
            service-account document or the token exchange fails.
    """
    try:
        info = json.loads(credentials)
    except (TypeError, ValueError) as exc:
        raise _config_error(f"vertex credentials are not valid JSON: {exc}", exc) from exc
    if not isinstance(info, dict):
        raise _config_error("vertex credentials must be a JSON object")
    try:
        creds = service_account.Credentials.from_service_account_info(info, scopes=[VERTEX_AUTH_SCOPE])
        creds.refresh(google.auth.transport.requests.Request())
    except (ValueError, KeyError, google.auth.exceptions.GoogleAuthError) as exc:
        raise _config_error(f"vertex credentials rejected: {exc}", exc) from exc
    token = creds.token
    if not token:
        raise _config_error("vertex token exchange returned no access token")
    log_event(
        logger or get_logger("unillm.anthropic"),
        "vertex.token",
        LogContext(provider=PROVIDER),
        project_id=project_id,
        location=location,
        token_prefix=token[:VERTEX_TOKEN_LOG_PREFIX],
    )
    return token


__all__ = ["mint_access_token"]

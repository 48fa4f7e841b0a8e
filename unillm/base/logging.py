"""Structured logging utilities for the provider layer.

All loggers hang off the shared ``unillm`` base logger, which writes one JSON
object per line to stderr. The level is read from ``UNILLM_LOG_LEVEL``.

``log_event`` emits a JSON payload for a named event; ``normalized_log_event``
guarantees the canonical keys (``structured``, ``phase``, ``attempt``,
``error_code``, ``emitted``, ``tokens``) so events from different providers
can be aggregated the same way.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "unillm"
LOG_LEVEL_ENV = "UNILLM_LOG_LEVEL"

_CONSOLE_HANDLER_ATTR = "_unillm_console_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: Optional[str], default: int = logging.INFO) -> int:
    """Parse a logging level name; unknown values fall back to ``default``."""
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared base logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    logger.setLevel(desired_level)
    formatter: logging.Formatter = JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)
    managed = [h for h in logger.handlers if getattr(h, _CONSOLE_HANDLER_ATTR, False)]
    for handler in managed:
        stream = getattr(handler, "stream", None)
        if stream is not sys.stderr or getattr(stream, "closed", False):
            # stderr may have been swapped (pytest capture); rebind
            logger.removeHandler(handler)
            continue
        handler.setLevel(desired_level)
        handler.setFormatter(formatter)
        return logger
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(formatter)
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a logger under the shared ``unillm`` hierarchy.

    Child names (``unillm.openai``) propagate to the base logger and carry no
    handlers of their own, so every event is written exactly once.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    keep_none: bool = False,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON line.

    Keys with ``None`` values are dropped unless ``keep_none`` is set.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    """Coerce token usage info into a JSON-friendly mapping (or ``None``)."""
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens.items())
    to_dict = getattr(tokens, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit an event carrying the normalized key set.

    ``error_code`` is omitted when ``None``; the other normalized keys are
    always present. ``extra_fields`` never overwrite normalized values.
    """
    base_fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, keep_none=True, level=level, **base_fields)


__all__ = [
    "LogContext",
    "get_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
    "BASE_LOGGER_NAME",
]

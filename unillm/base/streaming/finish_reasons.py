"""
Finish-reason reconciliation.

Each provider declares a table from raw vendor values to canonical values
(``None`` meaning "not finished"). Values outside the table are protocol
errors rather than being coerced. A raw value that maps to ``stop`` while the
turn produced tool calls is reported as ``tool_calls``.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from ..errors import ErrorCode, ProviderError
from ..models import FinishReason


class FinishReasonTable:
    """Vendor finish-reason vocabulary for one provider."""

    def __init__(self, provider: str, mapping: Mapping[Any, Optional[FinishReason]]) -> None:
        self.provider = provider
        self._mapping = dict(mapping)

    def __contains__(self, raw: Any) -> bool:
        return raw in self._mapping

    def resolve(self, raw: Any, *, has_tool_calls: bool = False, model: Optional[str] = None) -> Optional[FinishReason]:
        """Map ``raw`` to a canonical finish reason.

        Raises:
            ProviderError: ``PROTOCOL`` when ``raw`` is not a known value.
        """
        try:
            reason = self._mapping[raw]
        except (KeyError, TypeError):
            raise ProviderError(
                code=ErrorCode.PROTOCOL,
                message=f"unrecognized finish reason {raw!r}",
                provider=self.provider,
                model=model,
            ) from None
        if reason is FinishReason.STOP and has_tool_calls:
            return FinishReason.TOOL_CALLS
        return reason


__all__ = ["FinishReasonTable"]

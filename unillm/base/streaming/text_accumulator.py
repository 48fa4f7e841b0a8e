"""
Running text accumulation for stream normalizers.

Each vendor event contributes ``new_text``; the delta handed to the caller is
the suffix of the accumulation beyond its previous length. Concatenating all
deltas in order therefore reproduces ``accumulated`` exactly, and an empty
event yields an empty delta.
"""
from __future__ import annotations


class TextAccumulator:
    """Accumulates streamed text and returns per-event deltas."""

    __slots__ = ("_text",)

    def __init__(self) -> None:
        self._text = ""

    @property
    def accumulated(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def push(self, new_text: str | None) -> str:
        """Append ``new_text`` and return the newly produced suffix."""
        previous = len(self._text)
        self._text += new_text or ""
        return self._text[previous:]


__all__ = ["TextAccumulator"]

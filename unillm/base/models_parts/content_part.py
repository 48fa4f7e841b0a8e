"""
Content part variants for canonical input messages.

A message body is an ordered sequence of parts. Two variants exist: plain text
and base64 encoded images. The ordering of parts is preserved end-to-end since
vendors honour interleaving of text and image blocks.
"""
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, asdict
from typing import Any, Dict, Literal, Union


ContentPartType = Literal["text", "image"]


@dataclass(frozen=True)
class TextPart:
    """Plain text segment of a message."""

    text: str
    type: Literal["text"] = "text"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ImagePart:
    """Image segment carried as base64 text plus a MIME type.

    Attributes:
        data: Base64 encoded image bytes (no ``data:`` prefix).
        media_type: MIME type such as ``"image/png"``.

    Methods:
        data_uri: Wrap the payload as ``data:<media_type>;base64,<data>``.
        decoded: Return the raw bytes; raises ``ValueError`` when the payload
            is not valid base64.
    """

    data: str
    media_type: str
    type: Literal["image"] = "image"

    def data_uri(self) -> str:
        return f"data:{self.media_type};base64,{self.data}"

    def decoded(self) -> bytes:
        try:
            return base64.b64decode(self.data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"image data is not valid base64: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        # payload omitted to keep logs small
        return {"type": self.type, "media_type": self.media_type, "size": len(self.data)}


ContentPart = Union[TextPart, ImagePart]


__all__ = [
    "ContentPart",
    "ContentPartType",
    "TextPart",
    "ImagePart",
]

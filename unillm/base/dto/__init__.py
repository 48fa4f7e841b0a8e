"""Pydantic DTOs used at the provider boundary."""

from .adapter_params import AdapterParams
from .chat import ChatRequestDTO, MessageDTO, ToolSpecDTO, validate_request

__all__ = ["AdapterParams", "ChatRequestDTO", "MessageDTO", "ToolSpecDTO", "validate_request"]

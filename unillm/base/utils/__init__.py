"""Small shared helpers used by provider translators and normalizers."""

from .tool_arguments import dump_arguments, is_json_object, to_plain

__all__ = ["dump_arguments", "is_json_object", "to_plain"]

"""Schema compression and token accounting."""

from .compressor import encode_type, escape_xml, schema_to_compact_string
from .metrics import compress_tool_schemas, compress_with_metrics, reduction_percent
from .tokens import estimate_tokens, estimate_tokens_by_chars, get_estimator

__all__ = [
    "compress_tool_schemas",
    "compress_with_metrics",
    "encode_type",
    "escape_xml",
    "estimate_tokens",
    "estimate_tokens_by_chars",
    "get_estimator",
    "reduction_percent",
    "schema_to_compact_string",
]

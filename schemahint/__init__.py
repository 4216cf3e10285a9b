"""Compact, token-cheap encodings of tool parameter schemas."""

from .models import BatchResult, CompressedTool, CompressionMetrics, ToolDescriptor
from .schema import (
    compress_tool_schemas,
    compress_with_metrics,
    encode_type,
    estimate_tokens,
    schema_to_compact_string,
)

__all__ = [
    "BatchResult",
    "CompressedTool",
    "CompressionMetrics",
    "ToolDescriptor",
    "compress_tool_schemas",
    "compress_with_metrics",
    "encode_type",
    "estimate_tokens",
    "schema_to_compact_string",
]

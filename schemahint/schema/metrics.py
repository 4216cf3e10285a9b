"""Token savings of compact schemas, per schema and across tool batches."""

import json
import math
import reprlib
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from schemahint.models import BatchResult, CompressedTool, CompressionMetrics, ToolDescriptor
from schemahint.schema.compressor import schema_to_compact_string
from schemahint.schema.tokens import estimate_tokens
from schemahint.utils import get_logger

logger = get_logger(__name__)

Estimator = Callable[[str], int]


def _serialize(schema: Any) -> str:
    """Pretty-print the schema the way it would appear in a prompt."""
    try:
        return json.dumps(schema, ensure_ascii=False, indent=2, default=str)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning("schema not JSON serializable (%s), measuring repr instead", e)
    try:
        return repr(schema)
    except RecursionError:
        # nesting too deep even for repr; measure a depth-capped rendering
        return reprlib.repr(schema)


def reduction_percent(original_tokens: int, compressed_tokens: int) -> int:
    """Percentage saved, rounded half up and clamped to 0..100."""
    if original_tokens <= 0:
        return 0
    saved = max(0.0, (original_tokens - compressed_tokens) / original_tokens * 100)
    return min(100, math.floor(saved + 0.5))


def compress_with_metrics(schema: Any, estimator: Optional[Estimator] = None) -> CompressionMetrics:
    estimator = estimator or estimate_tokens
    compressed = schema_to_compact_string(schema)
    original_tokens = estimator(_serialize(schema))
    compressed_tokens = estimator(compressed)
    return CompressionMetrics(
        compressed=compressed,
        original_tokens=original_tokens,
        compressed_tokens=compressed_tokens,
        reduction=reduction_percent(original_tokens, compressed_tokens),
    )


def _as_tool(tool: Union[ToolDescriptor, Mapping[str, Any]]) -> ToolDescriptor:
    if isinstance(tool, ToolDescriptor):
        return tool
    try:
        return ToolDescriptor.model_validate(tool)
    except ValidationError as e:
        raise ValueError(f"Invalid tool descriptor: {e.errors()[0]['msg']}") from e


def compress_tool_schemas(
    tools: Iterable[Union[ToolDescriptor, Mapping[str, Any]]],
    estimator: Optional[Estimator] = None,
) -> BatchResult:
    """Compress every tool's input schema and total the token counts.

    ``total_reduction`` is derived from the summed counts, not averaged
    across tools.
    """
    compressed_tools = []
    original_total = 0
    compressed_total = 0

    for raw in tools:
        tool = _as_tool(raw)
        metrics = compress_with_metrics(tool.input_schema, estimator)
        compressed_tools.append(CompressedTool(name=tool.name, compressed_schema=metrics.compressed))
        original_total += metrics.original_tokens
        compressed_total += metrics.compressed_tokens

    logger.debug("compressed tools=%d original_tokens=%d compressed_tokens=%d",
                 len(compressed_tools), original_total, compressed_total)

    return BatchResult(
        compressed_tools=compressed_tools,
        total_reduction=reduction_percent(original_total, compressed_total),
        original_tokens=original_total,
        compressed_tokens=compressed_total,
    )

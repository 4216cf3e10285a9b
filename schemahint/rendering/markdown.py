
"""Render compression results to Markdown format."""

from typing import Dict, List
from schemahint.config.constants import DEFAULT_CONFIG
from schemahint.models import BatchResult

def render_md(batch: BatchResult, config: Dict = None) -> str:
    """Render a batch compression result to Markdown.

    Args:
        batch: Result of compress_tool_schemas
        config: Configuration dict with labels settings

    Returns:
        Markdown formatted string

    Raises:
        ValueError: If batch is not a BatchResult
    """
    if not isinstance(batch, BatchResult):
        raise ValueError(f"Expected BatchResult, got {type(batch).__name__}")

    if config is None:
        config = DEFAULT_CONFIG

    labels = {**DEFAULT_CONFIG["labels"], **config.get("labels", {})}

    lines: List[str] = [
        f"# {labels['title']}",
        "",
        f"> {batch.original_tokens} → {batch.compressed_tokens} {labels['tokens']} "
        f"({batch.total_reduction}% {labels['reduction']})",
        "",
    ]

    for i, tool in enumerate(batch.compressed_tools, 1):
        name = tool.name.strip() or f"Tool {i}"  # Fallback for unnamed tools
        lines.append(f"## {i}. {name}")
        lines.append("")
        lines.append(f"`{tool.compressed_schema}`")
        lines.append("")

    return "\n".join(lines).strip() + "\n"

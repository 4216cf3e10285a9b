"""Pydantic models describing compressor inputs and results."""

from __future__ import annotations

from typing import Any, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class BaseModelWithConfig(BaseModel):
    """Base model accepting both field names and camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class ToolDescriptor(BaseModelWithConfig):
    """Named tool whose parameter schema gets compressed.

    The schema is kept loosely typed on purpose: malformed schemas are valid
    input and degrade inside the encoder instead of failing validation here.
    """

    name: str
    input_schema: Any = Field(
        default=None,
        validation_alias=AliasChoices("inputSchema", "input_schema"),
        serialization_alias="inputSchema",
    )

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)


class CompressionMetrics(BaseModelWithConfig):
    """Compact encoding of one schema with its estimated token savings."""

    compressed: str
    original_tokens: int = Field(alias="originalTokens", ge=0)
    compressed_tokens: int = Field(alias="compressedTokens", ge=0)
    reduction: int = Field(ge=0, le=100)


class CompressedTool(BaseModelWithConfig):
    """Tool name paired with its compact schema string."""

    name: str
    compressed_schema: str = Field(alias="compressedSchema")


class BatchResult(BaseModelWithConfig):
    """Compressed tools in input order plus token totals for the whole batch."""

    compressed_tools: List[CompressedTool] = Field(default_factory=list, alias="compressedTools")
    total_reduction: int = Field(default=0, alias="totalReduction", ge=0, le=100)
    original_tokens: int = Field(default=0, alias="originalTokens", ge=0)
    compressed_tokens: int = Field(default=0, alias="compressedTokens", ge=0)

import os
import sys

import pytest

os.environ.setdefault("LOG_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "_logs"))

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from schemahint.models import BatchResult, CompressedTool, CompressionMetrics, ToolDescriptor


def test_tool_descriptor_accepts_both_schema_spellings():
    schema = {"type": "object", "properties": {}}
    assert ToolDescriptor.model_validate({"name": "a", "inputSchema": schema}).input_schema == schema
    assert ToolDescriptor.model_validate({"name": "a", "input_schema": schema}).input_schema == schema
    assert ToolDescriptor(name="a").input_schema is None


def test_tool_descriptor_keeps_malformed_schemas_and_extras():
    tool = ToolDescriptor.model_validate({"name": "a", "inputSchema": "not a schema", "description": "Does a"})
    assert tool.input_schema == "not a schema"
    assert tool.model_dump(by_alias=True)["inputSchema"] == "not a schema"


def test_tool_descriptor_requires_name():
    with pytest.raises(ValueError):
        ToolDescriptor.model_validate({"inputSchema": {}})


def test_metrics_reduction_bounds():
    with pytest.raises(ValueError):
        CompressionMetrics(compressed="x", original_tokens=1, compressed_tokens=1, reduction=101)
    with pytest.raises(ValueError):
        CompressionMetrics(compressed="x", original_tokens=1, compressed_tokens=1, reduction=-1)


def test_batch_result_roundtrips_through_aliases():
    batch = BatchResult(
        compressed_tools=[CompressedTool(name="a", compressed_schema="<schema></schema>")],
        total_reduction=10,
        original_tokens=10,
        compressed_tokens=9,
    )
    dumped = batch.model_dump(by_alias=True)
    assert dumped["compressedTools"][0]["compressedSchema"] == "<schema></schema>"
    assert BatchResult.model_validate(dumped) == batch

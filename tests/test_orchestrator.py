import json
import os
import sys

import pytest

os.environ.setdefault("LOG_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "_logs"))

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from schemahint.orchestrator import load_tools, run_once
from schemahint.schema.metrics import compress_tool_schemas
from schemahint.schema.tokens import estimate_tokens, estimate_tokens_by_chars

TOOLS = [
    {
        "name": "search",
        "description": "Search the docs",
        "inputSchema": {
            "type": "object",
            "properties": {"topic": {"type": "string"}, "query": {"type": "string"}},
            "required": ["topic", "query"],
        },
    },
    {"name": "list_resources"},
]


def _write_config(tmp_path, **overrides):
    cfg = {"output": {"dir": str(tmp_path / "out"), "formats": ["json", "md", "txt"]}}
    cfg.update(overrides)
    path = tmp_path / "config.json"
    # JSON is valid YAML
    path.write_text(json.dumps(cfg), encoding="utf-8")
    return str(path)


def _write_tools(tmp_path, name="tools.json", data=TOOLS):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_load_tools_json_list(tmp_path):
    tools = load_tools(_write_tools(tmp_path))
    assert [t.name for t in tools] == ["search", "list_resources"]
    assert tools[1].input_schema is None


def test_load_tools_yaml_mapping(tmp_path):
    path = tmp_path / "tools.yaml"
    path.write_text(
        "tools:\n"
        "  - name: fetch\n"
        "    inputSchema:\n"
        "      type: object\n"
        "      properties:\n"
        "        url: {type: string, format: uri}\n"
        "      required: [url]\n",
        encoding="utf-8",
    )
    tools = load_tools(str(path))
    assert tools[0].name == "fetch"
    assert tools[0].input_schema["required"] == ["url"]


@pytest.mark.parametrize(
    "name,content,message",
    [
        ("bad.json", "{not json", "Cannot parse"),
        ("obj.json", '{"name": "x"}', "must contain a list"),
        ("noname.json", '[{"inputSchema": {}}]', "Invalid tool at index 0"),
    ],
)
def test_load_tools_rejects_bad_files(tmp_path, name, content, message):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError, match=message):
        load_tools(str(path))


def test_run_once_writes_outputs(tmp_path):
    config_path = _write_config(tmp_path, tools_file=_write_tools(tmp_path))

    batch = run_once(config_path)

    assert [t.compressed_schema for t in batch.compressed_tools] == [
        "<schema>topic*:string, query*:string</schema>",
        "<schema></schema>",
    ]
    files = sorted(os.listdir(tmp_path / "out"))
    assert [os.path.splitext(f)[1] for f in files] == [".json", ".md", ".txt"]
    txt = next(f for f in files if f.endswith(".txt"))
    assert (tmp_path / "out" / txt).read_text(encoding="utf-8").startswith("search: <schema>")


def test_run_once_overrides(tmp_path):
    config_path = _write_config(tmp_path, tools_file="missing.json", token_estimator="words")
    tools_path = _write_tools(tmp_path)

    by_words = run_once(config_path, tools_file=tools_path)
    by_chars = run_once(config_path, tools_file=tools_path, token_estimator="chars")

    tools = load_tools(tools_path)
    assert by_words == compress_tool_schemas(tools, estimate_tokens)
    assert by_chars == compress_tool_schemas(tools, estimate_tokens_by_chars)


def test_run_once_requires_tools_file(tmp_path):
    with pytest.raises(ValueError, match="tools_file required"):
        run_once(_write_config(tmp_path))


def test_run_once_rejects_invalid_config(tmp_path):
    config_path = _write_config(tmp_path, tools_file=_write_tools(tmp_path), token_estimator="tiktoken")
    with pytest.raises(ValueError, match="Config validation error"):
        run_once(config_path)

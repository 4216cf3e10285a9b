import json
import time
import uuid
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from schemahint.models import BatchResult, ToolDescriptor
from schemahint.rendering.markdown import render_md
from schemahint.rendering.prompt import render_tools_prompt
from schemahint.schema.metrics import compress_tool_schemas
from schemahint.schema.tokens import get_estimator
from schemahint.utils import get_logger, load_file, validate_config, write_output

logger = get_logger(__name__)

def load_tools(path: str) -> List[ToolDescriptor]:
    """Load tool descriptors from a JSON or YAML file.

    Accepts either a list of tools or a mapping with a ``tools`` list.
    """
    raw = load_file(path)
    try:
        data = json.loads(raw) if path.endswith(".json") else yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Cannot parse tools file {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("tools")
    if not isinstance(data, list):
        raise ValueError(f"Tools file {path} must contain a list of tools")

    tools = []
    for i, item in enumerate(data):
        try:
            tools.append(ToolDescriptor.model_validate(item))
        except ValidationError as e:
            raise ValueError(f"Invalid tool at index {i}: {e.errors()[0]['msg']}") from e
    return tools

def _apply_overrides(cfg: Dict[str, Any], overrides: Optional[Dict[str, Optional[str]]]) -> None:
    if not overrides:
        return
    for key in ("tools_file", "token_estimator"):
        if overrides.get(key) is not None:
            cfg[key] = overrides[key]

def _execute(cfg: Dict[str, Any]) -> BatchResult:
    """Compress the configured tools and write the requested outputs."""
    if not cfg.get("tools_file"):
        raise ValueError("tools_file required (config or --tools)")

    estimator_name = cfg.get("token_estimator", "words")
    estimator = get_estimator(estimator_name)

    t0 = time.monotonic()
    tools = load_tools(cfg["tools_file"])
    logger.info("tools loaded count=%d file=%s", len(tools), cfg["tools_file"])

    batch = compress_tool_schemas(tools, estimator)
    logger.info(
        "compressed tools=%d estimator=%s original_tokens=%d compressed_tokens=%d reduction=%d%% took_ms=%d",
        len(batch.compressed_tools),
        estimator_name,
        batch.original_tokens,
        batch.compressed_tokens,
        batch.total_reduction,
        int((time.monotonic() - t0) * 1000),
    )

    md = render_md(batch, cfg)
    prompt_text = render_tools_prompt(batch, cfg.get("prompt_file"))
    written = write_output(batch, md, prompt_text, cfg["output"])
    logger.info("output written dir=%s files=%d", cfg["output"]["dir"], len(written))
    return batch

def run_once(
    config_path: str,
    *,
    tools_file: Optional[str] = None,
    token_estimator: Optional[str] = None,
) -> BatchResult:
    """Execute one compression run with given config file path."""
    run_id = uuid.uuid4().hex[:8]
    logger.info("=== run start id=%s ===", run_id)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
        validate_config(cfg)
        _apply_overrides(cfg, {"tools_file": tools_file, "token_estimator": token_estimator})
        return _execute(cfg)

    except Exception as e:
        logger.error("Compression run failed: %s", e)
        raise
    finally:
        logger.info("=== run end id=%s ===", run_id)

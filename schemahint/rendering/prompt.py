# schemahint/rendering/prompt.py
import yaml
from jinja2 import Environment

from schemahint.config.constants import DEFAULT_PROMPT_TEMPLATE
from schemahint.models import BatchResult

def render_tools_prompt(batch: BatchResult, prompt_file: str = None) -> str:
    """Render compressed tools into a prompt block.

    Compact schemas are already XML-escaped, so autoescape stays off.
    """
    template = DEFAULT_PROMPT_TEMPLATE
    if prompt_file:
        with open(prompt_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        template = data.get("template") or DEFAULT_PROMPT_TEMPLATE
    env = Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True)
    text = env.from_string(template).render(
        tools=batch.compressed_tools,
        total_reduction=batch.total_reduction,
        original_tokens=batch.original_tokens,
        compressed_tokens=batch.compressed_tokens,
    )
    return text.strip() + "\n"

"""Compact string encoding of JSON Schemas for tool-calling prompts.

Turns a tool's parameter schema into a short hint such as
``<schema>topic*:string, limit?:number(≥1,≤50)</schema>``. The encoding is
lossy (descriptions and deep structure are dropped) and total: malformed
nodes degrade to ``any`` or to the empty-schema sentinel instead of raising.
"""

import json
from typing import Any, Dict, FrozenSet, List

from schemahint.config.constants import (
    EMPTY_SCHEMA,
    ENUM_DISPLAY_THRESHOLD,
    MAX_SCHEMA_DEPTH,
    OBJECT_EXPAND_LIMIT,
    PATTERN_PREVIEW_LENGTH,
    STRING_FORMATS,
    XML_ESCAPES,
)
from schemahint.utils import get_logger

logger = get_logger(__name__)


def escape_xml(text: Any) -> str:
    """Escape XML special characters so keys and values cannot break out of the tags."""
    s = text if isinstance(text, str) else _to_text(text)
    for raw, entity in XML_ESCAPES:
        s = s.replace(raw, entity)
    return s


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
        except (TypeError, ValueError, RecursionError):
            # circular, too deep, or non-string keys
            return "..."
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_type(prop: Dict[str, Any], *names: str) -> bool:
    t = prop.get("type")
    return isinstance(t, str) and t in names


def _merge_all_of(members: List[Any]) -> Dict[str, Any]:
    """Union the ``properties`` of every member; later members win on key clashes."""
    merged: Dict[str, Any] = {}
    for member in members:
        if isinstance(member, dict) and isinstance(member.get("properties"), dict):
            merged.update(member["properties"])
    return merged


def _constraint_suffix(parts: List[str]) -> str:
    return f"({','.join(parts)})" if parts else ""


def _default_suffix(prop: Dict[str, Any], quoted: bool = False) -> str:
    if "default" not in prop:
        return ""
    value = escape_xml(prop["default"])
    return f'="{value}"' if quoted else f"={value}"


def _range_parts(prop: Dict[str, Any], low: str, high: str) -> List[str]:
    parts = []
    if _is_number(prop.get(low)):
        parts.append(f"≥{_to_text(prop[low])}")
    if _is_number(prop.get(high)):
        parts.append(f"≤{_to_text(prop[high])}")
    return parts


def _encode_array(prop: Dict[str, Any], path: FrozenSet[int]) -> str:
    items = prop.get("items")
    if isinstance(items, list) and items:
        encoded = f"tuple[{','.join(encode_type(i, _path=path) for i in items)}]"
    elif items is None or isinstance(items, list):
        encoded = "array[any]"
    else:
        encoded = f"array[{encode_type(items, _path=path)}]"

    min_items, max_items = prop.get("minItems"), prop.get("maxItems")
    if _is_number(min_items) or _is_number(max_items):
        low = _to_text(min_items) if _is_number(min_items) else "0"
        high = _to_text(max_items) if _is_number(max_items) else "∞"
        encoded += f"{{{low}..{high}}}"
    return encoded


def _encode_enum(values: List[Any], count_placeholder: bool = False) -> str:
    if len(values) <= ENUM_DISPLAY_THRESHOLD:
        return f"enum({'|'.join(escape_xml(v) for v in values)})"
    return f"enum({len(values)})" if count_placeholder else "enum"


def _encode_fields(fields: Dict[str, Any], path: FrozenSet[int]) -> str:
    return ",".join(f"{escape_xml(k)}:{encode_type(v, _path=path)}" for k, v in fields.items())


def _encode_alternative(alt: Any, path: FrozenSet[int]) -> str:
    """Encode one ``oneOf``/``anyOf`` member, summarizing enums, ranges and objects."""
    if not isinstance(alt, dict):
        return "any"
    if isinstance(alt.get("enum"), list):
        return _encode_enum(alt["enum"], count_placeholder=True)
    if _is_type(alt, "number", "integer"):
        parts = _range_parts(alt, "minimum", "maximum")
        if parts:
            return f"number{_constraint_suffix(parts)}"
    if _is_type(alt, "object"):
        props = alt.get("properties")
        if isinstance(props, dict) and 0 < len(props) <= OBJECT_EXPAND_LIMIT:
            return f"object({len(props)})"
        return "object"
    return encode_type(alt, _path=path)


def encode_type(prop: Any, *, _path: FrozenSet[int] = frozenset()) -> str:
    """Return the compact type token for a single schema node.

    ``_path`` holds the ids of the enclosing nodes; it bounds nesting depth and
    stops self-referencing dicts from recursing forever.
    """
    if not isinstance(prop, dict):
        return "any"
    if id(prop) in _path:
        logger.debug("cyclic schema node, encoding as any")
        return "any"
    if len(_path) >= MAX_SCHEMA_DEPTH:
        logger.debug("schema nesting exceeds depth=%d, encoding as any", MAX_SCHEMA_DEPTH)
        return "any"
    path = _path | {id(prop)}

    if _is_type(prop, "array"):
        return _encode_array(prop, path)

    if "const" in prop:
        return f"const({escape_xml(prop['const'])})"

    if isinstance(prop.get("enum"), list):
        return _encode_enum(prop["enum"])

    if isinstance(prop.get("allOf"), list):
        merged = _merge_all_of(prop["allOf"])
        return f"merged{{{_encode_fields(merged, path)}}}" if merged else "merged"

    if _is_type(prop, "object"):
        props = prop.get("properties")
        if isinstance(props, dict) and 0 < len(props) <= OBJECT_EXPAND_LIMIT:
            return f"object{{{_encode_fields(props, path)}}}"
        return "object"

    union = prop.get("oneOf") if isinstance(prop.get("oneOf"), list) else prop.get("anyOf")
    if isinstance(union, list):
        if not union:
            return "any"
        return "|".join(_encode_alternative(alt, path) for alt in union)

    if _is_type(prop, "string"):
        fmt = prop.get("format")
        base = STRING_FORMATS.get(fmt, "string") if isinstance(fmt, str) else "string"
        parts = []
        if _is_number(prop.get("minLength")):
            parts.append(f"≥{_to_text(prop['minLength'])}")
        if _is_number(prop.get("maxLength")):
            parts.append(f"≤{_to_text(prop['maxLength'])}")
        if isinstance(prop.get("pattern"), str):
            parts.append(f"/{escape_xml(prop['pattern'][:PATTERN_PREVIEW_LENGTH])}/")
        return base + _constraint_suffix(parts) + _default_suffix(prop, quoted=True)

    if _is_type(prop, "number", "integer"):
        parts = _range_parts(prop, "minimum", "maximum")
        if _is_number(prop.get("multipleOf")):
            parts.append(f"×{_to_text(prop['multipleOf'])}")
        return "number" + _constraint_suffix(parts) + _default_suffix(prop)

    if _is_type(prop, "boolean"):
        return "boolean" + _default_suffix(prop)

    if _is_type(prop, "null"):
        return "null"

    t = prop.get("type")
    return escape_xml(t) if isinstance(t, str) and t else "any"


def schema_to_compact_string(schema: Any) -> str:
    """Encode a tool parameter schema as ``<schema>key*:type, key?:type</schema>``.

    ``*`` marks required keys and ``?`` optional ones. Root-level arrays encode
    as a bare type and root ``allOf`` schemas as a ``merged{...}`` block.
    Never raises; anything unusable yields ``<schema></schema>``.
    """
    if not isinstance(schema, dict):
        return EMPTY_SCHEMA

    if _is_type(schema, "array") and schema.get("items") is not None:
        return f"<schema>{encode_type(schema)}</schema>"

    root = frozenset({id(schema)})
    required = schema.get("required")
    if not isinstance(required, list):
        required = []

    def param(key: Any, prop: Any) -> str:
        marker = "*" if key in required else "?"
        return f"{escape_xml(key)}{marker}:{encode_type(prop, _path=root)}"

    if isinstance(schema.get("allOf"), list):
        merged = _merge_all_of(schema["allOf"])
        if merged:
            return f"<schema>merged{{{','.join(param(k, v) for k, v in merged.items())}}}</schema>"

    properties = schema.get("properties")
    if not isinstance(properties, dict) or not properties:
        return EMPTY_SCHEMA

    return f"<schema>{', '.join(param(k, v) for k, v in properties.items())}</schema>"

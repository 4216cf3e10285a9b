"""Configuration constants for the schema compressor."""

# Enums longer than this render as a bare "enum" token
ENUM_DISPLAY_THRESHOLD = 3

# Objects with more properties than this are not expanded inline
OBJECT_EXPAND_LIMIT = 2

# Nodes nested deeper than this encode as "any"
MAX_SCHEMA_DEPTH = 50

# Regex patterns are cut to this many characters in constraint suffixes
PATTERN_PREVIEW_LENGTH = 10

EMPTY_SCHEMA = "<schema></schema>"

STRING_FORMATS = {
    "date": "date",
    "date-time": "datetime",
    "email": "email",
    "uri": "url",
    "url": "url",
    "uuid": "uuid",
    "ipv4": "ipv4",
    "ipv6": "ipv6",
}

XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)

# Token estimation heuristics
SHORT_TEXT_LENGTH = 20
SHORT_TEXT_CHARS_PER_TOKEN = 3
WORD_TOKEN_WEIGHT = 1.3
PUNCTUATION_TOKEN_WEIGHT = 0.5
JSON_PUNCTUATION = "{}[],:"
CHARS_PER_TOKEN = 4

# Default text labels for rendered reports
DEFAULT_LABELS = {
    "title": "Tool schema compression",
    "tokens": "tokens",
    "reduction": "reduction",
}

DEFAULT_PROMPT_TEMPLATE = (
    "{% for tool in tools %}"
    "{{ tool.name }}: {{ tool.compressed_schema }}\n"
    "{% endfor %}"
)

# Default configuration values
DEFAULT_CONFIG = {
    "token_estimator": "words",
    "labels": DEFAULT_LABELS,
}

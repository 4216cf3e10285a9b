"""Heuristic token counting.

Neither estimator is a real tokenizer; they only need to be consistent so the
original and compressed forms of a schema can be compared.
"""

import math
from typing import Callable, Dict

from schemahint.config.constants import (
    CHARS_PER_TOKEN,
    JSON_PUNCTUATION,
    PUNCTUATION_TOKEN_WEIGHT,
    SHORT_TEXT_CHARS_PER_TOKEN,
    SHORT_TEXT_LENGTH,
    WORD_TOKEN_WEIGHT,
)


def estimate_tokens(text: str) -> int:
    """Estimate tokens from word and JSON punctuation counts.

    Short strings fall back to one token per three characters.
    """
    if not text:
        return 0
    if len(text) < SHORT_TEXT_LENGTH:
        return math.ceil(len(text) / SHORT_TEXT_CHARS_PER_TOKEN)
    words = len(text.split())
    punctuation = sum(1 for ch in text if ch in JSON_PUNCTUATION)
    return math.ceil(words * WORD_TOKEN_WEIGHT + punctuation * PUNCTUATION_TOKEN_WEIGHT)


def estimate_tokens_by_chars(text: str) -> int:
    """Estimate tokens as one per four characters."""
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


ESTIMATORS: Dict[str, Callable[[str], int]] = {
    "words": estimate_tokens,
    "chars": estimate_tokens_by_chars,
}


def get_estimator(name: str) -> Callable[[str], int]:
    try:
        return ESTIMATORS[name]
    except KeyError:
        raise ValueError(f"Unknown token estimator: {name}") from None

"""Word-count based token estimation."""

from __future__ import annotations

from math import ceil

TOKENS_PER_WORD = 1.3


def count_words(text: str) -> int:
    """Count whitespace-delimited words."""
    return len(text.split())


def tokens_for_words(word_count: int) -> int:
    if word_count <= 0:
        return 0
    return ceil(word_count * TOKENS_PER_WORD)


def estimate_tokens(text: str) -> int:
    """Approximate the model token count of ``text``.

    This is a heuristic, not a tokenizer: it scales the word count by
    ``TOKENS_PER_WORD`` and rounds up. Blank text costs nothing.
    """
    return tokens_for_words(count_words(text))

"""Token-budgeted, word-safe segmentation of normalized text."""

from __future__ import annotations

from typing import Iterable, Iterator

from .config import DEFAULT_MAX_CHUNK_TOKENS
from .content.models import Chunk
from .tokens import count_words, tokens_for_words


def chunk_text(text: str, max_tokens: int = DEFAULT_MAX_CHUNK_TOKENS) -> list[Chunk]:
    """Split ``text`` into ordered chunks of roughly ``max_tokens`` each.

    Words are separated on single spaces and the budget is checked after each
    word is appended, so a chunk can overshoot by the cost of its last word.
    Joining the chunk texts with single spaces gives back ``text``, except for
    trailing spaces that would otherwise make up a final empty chunk.
    """
    return [
        Chunk(ordinal=index, text=" ".join(words))
        for index, words in enumerate(iter_word_batches(text.split(" "), max_tokens), start=1)
    ]


def iter_word_batches(words: Iterable[str], max_tokens: int) -> Iterator[list[str]]:
    """Yield consecutive word batches whose estimate just exceeds ``max_tokens``."""
    if max_tokens <= 0:
        raise ValueError("max_tokens must be > 0")

    batch: list[str] = []
    # Whitespace-split counts add up across space-joined words.
    batch_words = 0
    yielded = False
    for word in words:
        batch.append(word)
        batch_words += count_words(word)
        if tokens_for_words(batch_words) > max_tokens:
            yield batch
            yielded = True
            batch = []
            batch_words = 0
    # A trailing separator leaves one empty word behind; it is not a chunk of its own.
    if batch and (not yielded or any(batch)):
        yield batch

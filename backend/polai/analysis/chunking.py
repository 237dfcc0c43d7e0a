"""Size estimation and boundary-aware splitting of large policy documents."""

import math
from typing import List

CHARS_PER_TOKEN_ESTIMATE = 4
# Chunk budgets assume denser text than the estimate, so chunks stay under the limit.
CHARS_PER_TOKEN_CHUNKING = 3.5
# A boundary is only used when it falls in the last 30% of the chunk's budget.
MIN_BREAK_FRACTION = 0.7


def estimate_tokens(text: str) -> int:
    """Rough token count: one token per four characters, rounded up."""
    return math.ceil(len(text) / CHARS_PER_TOKEN_ESTIMATE)


def chunk_char_budget(max_input_tokens: int) -> int:
    """Characters per chunk for a given per-call token budget."""
    return int(max_input_tokens * CHARS_PER_TOKEN_CHUNKING)


def split_text(text: str, max_chars_per_chunk: int) -> List[str]:
    """Split *text* into consecutive chunks of at most *max_chars_per_chunk* characters.

    Each chunk ends just after the last ``.`` or newline inside its window when that
    boundary lies beyond 70% of the budget; otherwise the chunk is cut at the raw
    budget. Joining the chunks gives back *text* unchanged.
    """
    if max_chars_per_chunk <= 0:
        raise ValueError("max_chars_per_chunk must be positive")

    chunks: List[str] = []
    length = len(text)
    current = 0
    while current < length:
        end = min(current + max_chars_per_chunk, length)
        if end < length:
            break_point = max(text.rfind(".", current, end), text.rfind("\n", current, end))
            if break_point > current + max_chars_per_chunk * MIN_BREAK_FRACTION:
                end = break_point + 1
        chunks.append(text[current:end])
        current = end
    return chunks

"""Fixed-size word chunking of a transcript for the vector index."""

from __future__ import annotations

import math
from typing import Any

from vidnotes.ingestion.models import Chunk

# Rough average of characters per English word, including the trailing space.
CHARS_PER_WORD = 5


def words_per_chunk(chunk_chars: int) -> int:
    """Translate a target chunk size in characters into a word count."""
    return max(1, math.ceil(chunk_chars / CHARS_PER_WORD))


def word_chunk(
    transcript: str,
    chunk_chars: int = 2000,
    overlap: int = 0,
    metadata: dict[str, Any] | None = None,
) -> list[Chunk]:
    """Split *transcript* into uniform word-count chunks.

    Unlike :func:`vidnotes.ingestion.segmenter.split_text` this ignores
    paragraph and sentence structure; every chunk but the last holds the
    same number of words.

    Args:
        transcript: Raw transcript text.
        chunk_chars: Approximate characters per chunk (~2000 chars ≈ 400 words).
        overlap: Number of overlapping words between consecutive chunks.
        metadata: Caller metadata copied onto every chunk.

    Returns:
        List of :class:`Chunk` instances with sequential ``chunk_index``.
    """
    words = transcript.split()
    if not words:
        return []

    size = words_per_chunk(chunk_chars)
    step = size - overlap
    # Prevent infinite loop when overlap >= chunk size
    if step <= 0:
        step = size

    windows: list[str] = []
    for start in range(0, len(words), step):
        windows.append(" ".join(words[start : start + size]))
        if start + size >= len(words):
            break

    return [
        Chunk(
            content=text,
            chunk_index=i,
            total_chunks=len(windows),
            metadata=dict(metadata or {}),
        )
        for i, text in enumerate(windows)
    ]

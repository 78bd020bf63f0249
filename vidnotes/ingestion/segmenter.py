"""Paragraph-first text segmentation bounded by a maximum character length.

Text is flattened into a stream of pieces before packing:

1. Blank-line-delimited paragraphs that fit within ``max_length``.
2. Sentences of any paragraph that does not fit.
3. ``max_length``-sized character cuts of any sentence that still does not fit.
   This fallback is not semantically aware.

A single greedy pass then packs pieces into segments while the segment
(including the joiner placed before the next piece) stays within
``max_length``. Packing the flattened stream in one pass keeps the segment
count minimal even where paragraph and sentence pieces meet.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from vidnotes.ingestion.models import Segment

logger = logging.getLogger(__name__)

PARAGRAPH_JOINER = "\n\n"
SENTENCE_JOINER = " "

_PARAGRAPH_BREAK = re.compile(r"\n[ \t\r\f\v]*\n\s*")
_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")


@dataclass(frozen=True)
class _Piece:
    text: str
    joiner: str  # placed before this piece when it follows another in a segment
    forced: bool = False


def _force_cut(sentence: str, max_length: int, joiner: str) -> Iterator[_Piece]:
    for start in range(0, len(sentence), max_length):
        yield _Piece(
            sentence[start : start + max_length],
            joiner if start == 0 else "",
            forced=True,
        )


def _pieces(text: str, max_length: int) -> Iterator[_Piece]:
    for paragraph in _PARAGRAPH_BREAK.split(text):
        paragraph = paragraph.strip()
        if not paragraph:
            continue
        if len(paragraph) <= max_length:
            yield _Piece(paragraph, PARAGRAPH_JOINER)
            continue

        joiner = PARAGRAPH_JOINER
        for sentence in _SENTENCE_END.split(paragraph):
            if not sentence:
                continue
            if len(sentence) <= max_length:
                yield _Piece(sentence, joiner)
            else:
                logger.debug("Force-cutting a %d-char sentence", len(sentence))
                yield from _force_cut(sentence, max_length, joiner)
            joiner = SENTENCE_JOINER


def _join(pieces: list[_Piece]) -> str:
    parts = [pieces[0].text]
    for piece in pieces[1:]:
        parts.append(piece.joiner)
        parts.append(piece.text)
    return "".join(parts)


def split_text(text: str, max_length: int) -> list[Segment]:
    """Split *text* into ordered segments of at most *max_length* characters.

    Args:
        text: The transcript (or any long text) to split.
        max_length: Maximum characters per segment.

    Returns:
        Segments in original order. Empty text yields ``[]``; text no longer
        than *max_length* yields exactly one segment.

    Raises:
        ValueError: If *max_length* is less than 1.
    """
    if max_length < 1:
        raise ValueError(f"max_length must be positive, got {max_length}")

    groups: list[list[_Piece]] = []
    current: list[_Piece] = []
    current_len = 0

    for piece in _pieces(text, max_length):
        if current and current_len + len(piece.joiner) + len(piece.text) <= max_length:
            current.append(piece)
            current_len += len(piece.joiner) + len(piece.text)
        else:
            if current:
                groups.append(current)
            current = [piece]
            current_len = len(piece.text)

    if current:
        groups.append(current)

    total = len(groups)
    return [
        Segment(
            text=_join(group),
            index=i,
            total_segments=total,
            forced_cut=any(p.forced for p in group),
        )
        for i, group in enumerate(groups)
    ]

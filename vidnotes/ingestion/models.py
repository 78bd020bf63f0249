"""Data models for transcript input, segmentation, and index chunking."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class TranscriptSegment:
    """Uniform representation of one parsed transcript cue or utterance."""

    speaker: str | None
    text: str
    start_time: float | None = None
    end_time: float | None = None


@dataclass(frozen=True)
class Segment:
    """A bounded, ordered slice of a transcript produced by the segmenter."""

    text: str
    index: int
    total_segments: int
    forced_cut: bool = False


@dataclass
class Chunk:
    """A fixed-size slice of a transcript, ready for embedding."""

    content: str
    chunk_index: int = 0
    total_chunks: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

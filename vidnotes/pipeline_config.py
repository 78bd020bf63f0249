"""Per-run configuration: style enums, RAG options, and the NotesOptions dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NoteFormat(str, Enum):
    """Tone of the generated notes."""

    DETAILED = "detailed"
    CONCISE = "concise"
    BULLET = "bullet"


class DetailLevel(str, Enum):
    """Depth of the generated notes."""

    STANDARD = "standard"
    COMPREHENSIVE = "comprehensive"
    EXHAUSTIVE = "exhaustive"


class GenerationPath(str, Enum):
    """Execution path chosen once per run by the orchestrator."""

    DIRECT = "direct"
    CHUNKED = "chunked"
    RAG = "rag"


@dataclass(frozen=True)
class StyleOptions:
    """Immutable style choices applied to every prompt in a run."""

    format: NoteFormat = NoteFormat.DETAILED
    detail: DetailLevel = DetailLevel.STANDARD
    language: str = "english"

    def __post_init__(self) -> None:
        # Accept plain strings from CLI/API callers; frozen, so go through object.
        object.__setattr__(self, "format", NoteFormat(self.format))
        object.__setattr__(self, "detail", DetailLevel(self.detail))
        object.__setattr__(self, "language", self.language.strip().lower() or "english")


@dataclass(frozen=True)
class RagConfig:
    """Retrieval-augmented generation switch and vector-index location.

    ``namespace=None`` means a fresh namespace is generated for the run.
    """

    enabled: bool = False
    index_name: str | None = None
    namespace: str | None = None


@dataclass(frozen=True)
class NotesOptions:
    """Everything a single notes-generation run needs besides the transcript."""

    model_key: str | None = None
    style: StyleOptions = field(default_factory=StyleOptions)
    rag: RagConfig = field(default_factory=RagConfig)

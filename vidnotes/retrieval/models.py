"""Records written to and read from the vector index."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Metadata keys every stored chunk carries; matches without them are discarded.
TEXT_KEY = "text"
CHUNK_INDEX_KEY = "chunkIndex"
TOTAL_CHUNKS_KEY = "totalChunks"


@dataclass
class EmbeddingRecord:
    """One embedded chunk as upserted into the index."""

    id: str
    values: list[float]
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_vector(self) -> dict[str, Any]:
        return {"id": self.id, "values": self.values, "metadata": self.metadata}


@dataclass(frozen=True)
class QueryResult:
    """A ranked similarity match."""

    text: str
    score: float
    metadata: dict[str, Any]

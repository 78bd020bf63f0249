"""Run-scoped vector index over transcript chunks, backed by Pinecone.

Each generation run writes to its own namespace and deletes it when done;
the index is working storage, never a cache across runs.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from pinecone import Pinecone

from vidnotes.config import Settings, get_settings
from vidnotes.errors import MissingCredentialError, RetrievalError
from vidnotes.ingestion.chunking import word_chunk
from vidnotes.ingestion.embeddings import Embedder, OpenAIEmbedder
from vidnotes.ingestion.models import Chunk
from vidnotes.retrieval.models import (
    CHUNK_INDEX_KEY,
    TEXT_KEY,
    TOTAL_CHUNKS_KEY,
    EmbeddingRecord,
    QueryResult,
)

logger = logging.getLogger(__name__)


def run_namespace(run_id: str) -> str:
    """Namespace name for a single generation run."""
    return f"vidnotes-{run_id}"


class RetrievalIndex:
    """Store, query, and clear embedded transcript chunks in one namespace.

    Args:
        namespace: Index partition owned by this run.
        index: A Pinecone ``Index`` (or compatible object). Created lazily
            from settings when omitted.
        embedder: Callable mapping text to a vector. Defaults to OpenAI.
        settings: Application settings; chunk size, batch size and top-k
            defaults come from here.
        index_name: Pinecone index name, overriding ``settings.pinecone_index_name``.
    """

    def __init__(
        self,
        namespace: str,
        index: Any | None = None,
        embedder: Embedder | None = None,
        settings: Settings | None = None,
        index_name: str | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.namespace = namespace
        self.index_name = index_name or self.settings.pinecone_index_name
        self.embedder = embedder or OpenAIEmbedder(self.settings)
        self.batch_size = max(1, self.settings.rag_batch_size)
        self._index = index

    @property
    def index(self) -> Any:
        if self._index is None:
            if not self.settings.pinecone_api_key:
                raise MissingCredentialError("PINECONE_API_KEY", "pinecone")
            try:
                client = Pinecone(api_key=self.settings.pinecone_api_key)
                self._index = client.Index(self.index_name)
            except Exception as exc:  # noqa: BLE001
                raise RetrievalError(
                    f"Could not open index {self.index_name}: {exc}",
                    {"index": self.index_name, "namespace": self.namespace},
                ) from exc
            logger.info("Connected to Pinecone index: %s", self.index_name)
        return self._index

    def _embed_batch(self, texts: list[str]) -> list[list[float]]:
        # Concurrency is bounded by the batch size; batches themselves are sequential.
        with ThreadPoolExecutor(max_workers=min(len(texts), self.batch_size)) as pool:
            return list(pool.map(self.embedder, texts))

    def _records(
        self,
        batch: list[Chunk],
        vectors: list[list[float]],
    ) -> list[EmbeddingRecord]:
        records = []
        for chunk, vector in zip(batch, vectors, strict=True):
            metadata = {
                **chunk.metadata,
                TEXT_KEY: chunk.content,
                CHUNK_INDEX_KEY: chunk.chunk_index,
                TOTAL_CHUNKS_KEY: chunk.total_chunks,
            }
            records.append(
                EmbeddingRecord(id=f"chunk_{chunk.chunk_index}", values=vector, metadata=metadata)
            )
        return records

    def store_transcript(self, transcript: str, metadata: dict[str, Any] | None = None) -> int:
        """Chunk, embed, and upsert *transcript* into the run namespace.

        Args:
            transcript: Full transcript text.
            metadata: Extra fields copied onto every record. The reserved
                ``text``/``chunkIndex``/``totalChunks`` keys always win.

        Returns:
            Number of chunks stored.

        Raises:
            EmbeddingError: An embedding call failed.
            RetrievalError: An upsert failed.
        """
        chunks = word_chunk(transcript, chunk_chars=self.settings.rag_chunk_chars, metadata=metadata)
        logger.info("Split transcript of %d chars into %d chunks", len(transcript), len(chunks))

        index = self.index
        total_batches = -(-len(chunks) // self.batch_size)
        for batch_no, start in enumerate(range(0, len(chunks), self.batch_size), 1):
            batch = chunks[start : start + self.batch_size]
            logger.debug("Processing batch %d of %d", batch_no, total_batches)

            vectors = self._embed_batch([c.content for c in batch])
            records = self._records(batch, vectors)
            try:
                index.upsert(vectors=[r.to_vector() for r in records], namespace=self.namespace)
            except Exception as exc:  # noqa: BLE001
                raise RetrievalError(
                    f"Upsert failed: {exc}",
                    {"namespace": self.namespace, "batch": batch_no},
                ) from exc

        logger.info("Stored %d chunks in namespace %s", len(chunks), self.namespace)
        return len(chunks)

    def query(self, text: str, top_k: int | None = None) -> list[QueryResult]:
        """Return the chunks most similar to *text*, best first.

        Matches lacking a string ``text`` field or a numeric score are dropped.
        """
        top_k = top_k or self.settings.rag_top_k
        vector = self.embedder(text)
        index = self.index
        try:
            response = index.query(
                vector=vector,
                top_k=top_k,
                include_metadata=True,
                namespace=self.namespace,
            )
        except Exception as exc:  # noqa: BLE001
            raise RetrievalError(f"Query failed: {exc}", {"namespace": self.namespace}) from exc

        results: list[QueryResult] = []
        for match in response.matches or []:
            metadata = match.metadata
            score = match.score
            if not isinstance(metadata, dict) or not isinstance(metadata.get(TEXT_KEY), str):
                continue
            if isinstance(score, bool) or not isinstance(score, (int, float)):
                continue
            results.append(QueryResult(text=metadata[TEXT_KEY], score=float(score), metadata=metadata))

        results.sort(key=lambda r: r.score, reverse=True)
        logger.debug("Query matched %d chunks in %s", len(results), self.namespace)
        return results

    def clear(self) -> None:
        """Delete every vector in the run namespace."""
        logger.info("Clearing vectors from namespace: %s", self.namespace)
        index = self.index
        try:
            index.delete(delete_all=True, namespace=self.namespace)
        except Exception as exc:  # noqa: BLE001
            raise RetrievalError(f"Clear failed: {exc}", {"namespace": self.namespace}) from exc

"""Embedding helpers using OpenAI text-embedding-3-small."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from openai import OpenAI, OpenAIError

from vidnotes.config import Settings, get_settings
from vidnotes.errors import EmbeddingError, MissingCredentialError

logger = logging.getLogger(__name__)

Embedder = Callable[[str], list[float]]


class OpenAIEmbedder:
    """Callable that embeds one text per request.

    The client is created lazily so constructing the embedder never touches
    the network or requires a key.
    """

    def __init__(self, settings: Settings | None = None, client: OpenAI | None = None) -> None:
        self._settings = settings or get_settings()
        self._client = client
        self._client_lock = threading.Lock()
        self.model = self._settings.embedding_model

    @property
    def client(self) -> OpenAI:
        # Called from the batch thread pool; build exactly one client.
        with self._client_lock:
            if self._client is None:
                if not self._settings.openai_api_key:
                    raise MissingCredentialError("OPENAI_API_KEY", "openai embedding")
                self._client = OpenAI(api_key=self._settings.openai_api_key)
            return self._client

    def __call__(self, text: str) -> list[float]:
        logger.debug("Embedding text of length %d with %s", len(text), self.model)
        try:
            response = self.client.embeddings.create(input=[text], model=self.model)
        except OpenAIError as exc:
            raise EmbeddingError(f"Embedding request failed: {exc}", {"model": self.model}) from exc
        return response.data[0].embedding

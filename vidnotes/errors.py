"""Exception hierarchy for the notes pipeline.

None of these are retried locally. Each one aborts the run and carries a
message suitable for showing to the caller.
"""

from __future__ import annotations

from typing import Any


class NotesError(Exception):
    """Base class for every pipeline failure."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigurationError(NotesError):
    """Invalid run configuration, e.g. an unknown model key."""


class MissingCredentialError(NotesError):
    """The selected provider needs a credential that is not configured."""

    def __init__(self, credential: str, provider: str) -> None:
        super().__init__(
            f"{credential} is required for {provider} models but is not configured",
            {"credential": credential, "provider": provider},
        )
        self.credential = credential
        self.provider = provider


class ProviderError(NotesError):
    """The LLM backend call failed."""


class EmbeddingError(NotesError):
    """The embedding backend call failed."""


class RetrievalError(NotesError):
    """A vector-index operation (upsert, query, delete) failed."""


class IntegrationError(NotesError):
    """Merging per-segment notes into one document failed."""

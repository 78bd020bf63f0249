"""Pydantic request/response schemas for the notes API."""

from __future__ import annotations

from pydantic import BaseModel

from vidnotes.pipeline_config import DetailLevel, GenerationPath, NoteFormat


class RagOptions(BaseModel):
    """Optional retrieval-augmented generation block."""

    enabled: bool = True
    index_name: str | None = None
    namespace: str | None = None


class NotesRequest(BaseModel):
    """Request body for the /api/notes endpoint."""

    transcript: str
    model: str | None = None
    format: NoteFormat = NoteFormat.DETAILED
    detail: DetailLevel = DetailLevel.STANDARD
    language: str = "english"
    rag: RagOptions | None = None


class NotesResponse(BaseModel):
    """Response body for the notes endpoints."""

    notes: str
    path: GenerationPath
    model: str
    units: int


class ModelInfo(BaseModel):
    """One registry entry as exposed by /api/models."""

    key: str
    provider: str
    canonical_name: str
    context_window_tokens: int

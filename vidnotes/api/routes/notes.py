"""Notes endpoints: generate notes from a transcript body or an uploaded transcript file."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from vidnotes.api.models import ModelInfo, NotesRequest, NotesResponse, RagOptions
from vidnotes.errors import (
    ConfigurationError,
    EmbeddingError,
    IntegrationError,
    MissingCredentialError,
    NotesError,
    ProviderError,
    RetrievalError,
)
from vidnotes.generation.registry import available_models, resolve_model
from vidnotes.ingestion.parsers import parse_transcript, render_transcript
from vidnotes.pipeline import generate_notes
from vidnotes.pipeline_config import (
    DetailLevel,
    NoteFormat,
    NotesOptions,
    RagConfig,
    StyleOptions,
)

router = APIRouter()

# 20 MB transcript upload limit
MAX_UPLOAD_BYTES = 20 * 1024 * 1024

TRANSCRIPT_EXTENSIONS = {"vtt", "txt", "json", "md"}

# Most specific classes first; NotesError is the catch-all.
_STATUS_CODES: list[tuple[type[NotesError], int]] = [
    (ConfigurationError, 400),
    (MissingCredentialError, 501),
    (ProviderError, 503),
    (IntegrationError, 503),
    (EmbeddingError, 502),
    (RetrievalError, 502),
    (NotesError, 500),
]


def _to_http(exc: NotesError) -> HTTPException:
    status = next(code for cls, code in _STATUS_CODES if isinstance(exc, cls))
    return HTTPException(status_code=status, detail=str(exc))


def _options(request: NotesRequest) -> NotesOptions:
    rag = request.rag or RagOptions(enabled=False)
    return NotesOptions(
        model_key=request.model,
        style=StyleOptions(format=request.format, detail=request.detail, language=request.language),
        rag=RagConfig(enabled=rag.enabled, index_name=rag.index_name, namespace=rag.namespace),
    )


async def _generate(transcript: str, options: NotesOptions) -> NotesResponse:
    try:
        # Blocking network round-trips; keep them off the event loop.
        result = await asyncio.to_thread(generate_notes, transcript, options)
    except NotesError as exc:
        raise _to_http(exc) from exc
    return NotesResponse(
        notes=result.notes,
        path=result.path,
        model=result.model_key,
        units=result.units,
    )


@router.get("/api/models", response_model=list[ModelInfo])
async def list_models() -> list[ModelInfo]:
    """List every registered model key with its provider and context window."""
    models = []
    for key in available_models():
        profile = resolve_model(key)
        models.append(
            ModelInfo(
                key=key,
                provider=profile.provider,
                canonical_name=profile.canonical_name,
                context_window_tokens=profile.context_window_tokens,
            )
        )
    return models


@router.post("/api/notes", response_model=NotesResponse)
async def create_notes(request: NotesRequest) -> NotesResponse:
    """Generate notes from a transcript string."""
    return await _generate(request.transcript, _options(request))


@router.post("/api/notes/file", response_model=NotesResponse)
async def create_notes_from_file(
    file: Annotated[UploadFile, File()],
    model: Annotated[str | None, Form()] = None,
    format: Annotated[NoteFormat, Form()] = NoteFormat.DETAILED,
    detail: Annotated[DetailLevel, Form()] = DetailLevel.STANDARD,
    language: Annotated[str, Form()] = "english",
    rag: Annotated[bool, Form()] = False,
) -> NotesResponse:
    """Generate notes from an uploaded .vtt, .txt, .md, or .json transcript."""
    filename = file.filename or "transcript.txt"
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "txt"
    if ext not in TRANSCRIPT_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: .{ext}. Supported: {sorted(TRANSCRIPT_EXTENSIONS)}",
        )

    raw = await file.read()
    if len(raw) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Transcript file too large")

    try:
        transcript = render_transcript(parse_transcript(raw.decode("utf-8"), ext))
    except (UnicodeDecodeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Could not read transcript: {exc}") from exc

    request = NotesRequest(
        transcript=transcript,
        model=model,
        format=format,
        detail=detail,
        language=language,
        rag=RagOptions(enabled=rag),
    )
    return await _generate(request.transcript, _options(request))

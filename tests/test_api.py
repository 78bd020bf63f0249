"""Tests for API endpoints (no external API keys required)."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from vidnotes.api.main import app
from vidnotes.errors import (
    ConfigurationError,
    EmbeddingError,
    IntegrationError,
    MissingCredentialError,
    NotesError,
    ProviderError,
    RetrievalError,
)
from vidnotes.generation.registry import available_models
from vidnotes.pipeline import NotesResult
from vidnotes.pipeline_config import DetailLevel, GenerationPath, NoteFormat

client = TestClient(app)

GENERATE = "vidnotes.api.routes.notes.generate_notes"


def _result(path: GenerationPath = GenerationPath.DIRECT) -> NotesResult:
    return NotesResult(notes="# Notes", path=path, model_key="claude-sonnet-4", units=1)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_models_lists_registry():
    response = client.get("/api/models")
    assert response.status_code == 200
    body = response.json()
    assert [m["key"] for m in body] == available_models()
    assert body[0]["provider"] == "anthropic"


def test_models_follow_registry_listing():
    with patch("vidnotes.api.routes.notes.available_models", return_value=["gpt-4o"]):
        response = client.get("/api/models")
    assert [m["key"] for m in response.json()] == ["gpt-4o"]
    assert response.json()[0]["context_window_tokens"] == 128_000


def test_notes_requires_transcript():
    response = client.post("/api/notes", json={})
    assert response.status_code == 422


def test_notes_rejects_unknown_format():
    response = client.post("/api/notes", json={"transcript": "x", "format": "essay"})
    assert response.status_code == 422


def test_notes_success():
    with patch(GENERATE, return_value=_result()) as mock_generate:
        response = client.post(
            "/api/notes",
            json={
                "transcript": "Hello class.",
                "model": "gpt-4o",
                "format": "bullet",
                "detail": "exhaustive",
                "language": "French",
            },
        )

    assert response.status_code == 200
    assert response.json() == {
        "notes": "# Notes",
        "path": "direct",
        "model": "claude-sonnet-4",
        "units": 1,
    }
    transcript, options = mock_generate.call_args.args
    assert transcript == "Hello class."
    assert options.model_key == "gpt-4o"
    assert options.style.format is NoteFormat.BULLET
    assert options.style.detail is DetailLevel.EXHAUSTIVE
    assert options.style.language == "french"
    assert options.rag.enabled is False


def test_notes_rag_block():
    with patch(GENERATE, return_value=_result(GenerationPath.RAG)) as mock_generate:
        response = client.post(
            "/api/notes",
            json={"transcript": "t", "rag": {"index_name": "lectures", "namespace": "n1"}},
        )

    assert response.status_code == 200
    rag = mock_generate.call_args.args[1].rag
    assert (rag.enabled, rag.index_name, rag.namespace) == (True, "lectures", "n1")


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (ConfigurationError("Unsupported model: 'x'"), 400),
        (MissingCredentialError("ANTHROPIC_API_KEY", "anthropic"), 501),
        (ProviderError("overloaded"), 503),
        (IntegrationError("merge failed"), 503),
        (EmbeddingError("embedding down"), 502),
        (RetrievalError("index down"), 502),
        (NotesError("unexpected"), 500),
    ],
)
def test_pipeline_errors_map_to_status(error: NotesError, status: int):
    with patch(GENERATE, side_effect=error):
        response = client.post("/api/notes", json={"transcript": "t"})
    assert response.status_code == status
    assert response.json()["detail"] == str(error)


# --- File upload ---


def test_file_upload_vtt():
    vtt = b"WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nAda: Welcome to the course.\n"
    with patch(GENERATE, return_value=_result()) as mock_generate:
        response = client.post(
            "/api/notes/file",
            files={"file": ("lecture.vtt", vtt, "text/vtt")},
            data={"format": "concise", "rag": "true"},
        )

    assert response.status_code == 200
    transcript, options = mock_generate.call_args.args
    assert transcript == "Ada: Welcome to the course."
    assert options.style.format is NoteFormat.CONCISE
    assert options.rag.enabled is True


def test_file_upload_rejects_unsupported_extension():
    response = client.post(
        "/api/notes/file",
        files={"file": ("slides.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert response.status_code == 400
    assert "Unsupported file type" in response.json()["detail"]


def test_file_upload_rejects_bad_json():
    response = client.post(
        "/api/notes/file",
        files={"file": ("t.json", b'{"unknown": []}', "application/json")},
    )
    assert response.status_code == 400
    assert "Could not read transcript" in response.json()["detail"]


def test_file_upload_too_large():
    with patch("vidnotes.api.routes.notes.MAX_UPLOAD_BYTES", 10):
        response = client.post(
            "/api/notes/file",
            files={"file": ("t.txt", b"x" * 11, "text/plain")},
        )
    assert response.status_code == 413


def test_file_upload_requires_file():
    response = client.post("/api/notes/file")
    assert response.status_code == 422

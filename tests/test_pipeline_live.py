"""End-to-end runs against the real providers.

# MANUAL RUN REQUIRED: these tests call Anthropic, OpenAI and Pinecone.
# Run manually with: pytest -m expensive tests/test_pipeline_live.py -v
# Ensure .env has ANTHROPIC_API_KEY (and OPENAI_API_KEY, PINECONE_API_KEY for RAG).
#
# Not run by default (addopts excludes the ``expensive`` marker).
"""

from __future__ import annotations

import pytest

from vidnotes.config import get_settings
from vidnotes.pipeline import generate_notes
from vidnotes.pipeline_config import GenerationPath, NotesOptions, RagConfig, StyleOptions

TRANSCRIPT = """Speaker 1: Welcome back. Today we look at how a compiler turns source text into tokens.

Speaker 1: The lexer reads characters and groups them into tokens such as identifiers, numbers and operators.

Speaker 2: So whitespace is dropped at that stage?

Speaker 1: Mostly, yes. Next time we will feed those tokens into a recursive descent parser."""


@pytest.mark.expensive
def test_direct_notes_live() -> None:
    settings = get_settings()
    if not settings.anthropic_api_key:
        pytest.skip("ANTHROPIC_API_KEY not set")

    result = generate_notes(
        TRANSCRIPT,
        NotesOptions(style=StyleOptions(format="concise")),
        settings=settings,
    )

    assert result.path is GenerationPath.DIRECT
    assert "token" in result.notes.lower()


@pytest.mark.expensive
def test_rag_notes_live() -> None:
    settings = get_settings()
    if not (settings.anthropic_api_key and settings.openai_api_key and settings.pinecone_api_key):
        pytest.skip("ANTHROPIC_API_KEY, OPENAI_API_KEY and PINECONE_API_KEY are required")

    result = generate_notes(
        TRANSCRIPT,
        NotesOptions(rag=RagConfig(enabled=True)),
        settings=settings,
    )

    assert result.path is GenerationPath.RAG
    assert result.units > 0
    assert result.notes

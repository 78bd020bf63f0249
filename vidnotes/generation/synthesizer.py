"""Note synthesis: turn a text unit (or retrieved context) into notes."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from vidnotes.generation import prompts
from vidnotes.ingestion.parsers import is_no_audio
from vidnotes.pipeline_config import StyleOptions

if TYPE_CHECKING:
    from vidnotes.context import PipelineContext

logger = logging.getLogger(__name__)

# Leading bullets, heading hashes, numbering, and checkbox markup on outline lines
_OUTLINE_PREFIX_RE = re.compile(r"^\s*(?:#{1,6}\s*|[-*+•]\s+|\d+[.)]\s+|\[[ xX]\]\s+)+")
_EMPHASIS_RE = re.compile(r"(\*\*|__|\*|`)(.+?)\1")


def parse_outline(outline: str) -> list[str]:
    """Parse model-generated outline text into plain topic strings.

    Bullet/heading/numbering markup and emphasis markers are stripped and
    blank lines dropped; order is preserved.
    """
    points: list[str] = []
    for line in outline.splitlines():
        point = _OUTLINE_PREFIX_RE.sub("", line)
        point = _EMPHASIS_RE.sub(r"\2", point).strip().rstrip(":").strip()
        if point:
            points.append(point)
    return points


class NoteSynthesizer:
    """Build note-taking prompts and run them through the context's gateway."""

    def __init__(self, context: PipelineContext) -> None:
        self.context = context

    def _generate(self, prompt: str) -> str:
        return self.context.gateway.generate(
            prompt,
            self.context.profile,
            prompts.NOTE_TAKER_SYSTEM_PROMPT,
        )

    def synthesize(
        self,
        text_unit: str,
        style: StyleOptions,
        context_prefix: str | None = None,
    ) -> str:
        """Generate notes for *text_unit*.

        A blank unit or one carrying the no-audio marker produces an advisory
        note instead of a synthesis.
        """
        if is_no_audio(text_unit):
            logger.info("Transcript has no audio content; generating advisory note")
            return self._generate(prompts.no_audio_prompt(style))
        return self._generate(prompts.notes_prompt(text_unit, style, context_prefix))

    def synthesize_outline(self, style: StyleOptions) -> str:
        """Generate a content-free outline driven only by *style*."""
        return self._generate(prompts.outline_prompt(style))

    def synthesize_section(
        self,
        point: str,
        context_texts: list[str],
        style: StyleOptions,
    ) -> str:
        """Generate one section for outline *point* from retrieved excerpts."""
        return self._generate(prompts.section_prompt(point, context_texts, style))

"""Merge per-segment notes into a single document."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vidnotes.errors import IntegrationError, ProviderError
from vidnotes.generation import prompts
from vidnotes.pipeline_config import StyleOptions

if TYPE_CHECKING:
    from vidnotes.context import PipelineContext

logger = logging.getLogger(__name__)


class Integrator:
    """Single editor-persona call over all segment notes, in order."""

    def __init__(self, context: PipelineContext) -> None:
        self.context = context

    def integrate(self, notes: list[str], style: StyleOptions) -> str:
        """Merge ordered segment *notes*.

        A single element is returned unchanged without a model call.

        Raises:
            IntegrationError: *notes* is empty or the merge call failed.
        """
        if not notes:
            raise IntegrationError("No segment notes to integrate")
        if len(notes) == 1:
            return notes[0]

        logger.info("Integrating %d segment notes", len(notes))
        try:
            return self.context.gateway.generate(
                prompts.integration_prompt(notes, style),
                self.context.profile,
                prompts.EDITOR_SYSTEM_PROMPT,
            )
        except ProviderError as exc:
            raise IntegrationError(
                f"Failed to integrate {len(notes)} segment notes: {exc.message}",
                {"segments": len(notes)},
            ) from exc

"""Progress events emitted by the orchestrator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ProgressEvent:
    """A single step reported by the pipeline.

    ``current``/``total`` are set for counted steps (segments, outline points).
    """

    stage: str
    message: str
    current: int | None = None
    total: int | None = None


class ProgressListener(Protocol):
    """Receives progress events; must not raise."""

    def __call__(self, event: ProgressEvent) -> None: ...


def null_listener(event: ProgressEvent) -> None:
    """Default listener that ignores every event."""


class LoggingProgressListener:
    """Forward progress events to a logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("vidnotes.progress")

    def __call__(self, event: ProgressEvent) -> None:
        if event.total:
            self.logger.info("[%s %d/%d] %s", event.stage, event.current, event.total, event.message)
        else:
            self.logger.info("[%s] %s", event.stage, event.message)

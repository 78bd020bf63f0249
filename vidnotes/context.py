"""Per-run pipeline context passed explicitly to every component."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from vidnotes.config import Settings
from vidnotes.generation.gateway import ModelGateway
from vidnotes.generation.registry import ModelProfile
from vidnotes.progress import ProgressEvent, ProgressListener, null_listener


def _new_run_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class PipelineContext:
    """Immutable bundle of the collaborators one run shares."""

    settings: Settings
    profile: ModelProfile
    gateway: ModelGateway
    listener: ProgressListener = null_listener
    run_id: str = field(default_factory=_new_run_id)

    def emit(
        self,
        stage: str,
        message: str,
        current: int | None = None,
        total: int | None = None,
    ) -> None:
        self.listener(ProgressEvent(stage=stage, message=message, current=current, total=total))

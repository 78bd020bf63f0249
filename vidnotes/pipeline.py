"""Notes generation orchestrator: pick one execution path and drive it to completion.

Paths, in priority order:

1. ``rag``: retrieval-augmented, when ``options.rag.enabled`` is set.
2. ``chunked``: split -> synthesize each segment -> integrate, when the
   transcript is longer than ``context_threshold`` x the model's context window.
3. ``direct``: a single synthesis call over the whole transcript.

The choice is made once per run. Any failure aborts the run and no partial
notes are returned.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from vidnotes.config import Settings, get_settings
from vidnotes.context import PipelineContext
from vidnotes.errors import ProviderError
from vidnotes.generation.gateway import ModelGateway
from vidnotes.generation.integrator import Integrator
from vidnotes.generation.registry import ModelProfile, resolve_model
from vidnotes.generation.synthesizer import NoteSynthesizer, parse_outline
from vidnotes.ingestion.segmenter import split_text
from vidnotes.pipeline_config import GenerationPath, NotesOptions, RagConfig
from vidnotes.progress import ProgressListener, null_listener
from vidnotes.retrieval.index import RetrievalIndex, run_namespace

logger = logging.getLogger(__name__)

IndexFactory = Callable[[PipelineContext, RagConfig], RetrievalIndex]


@dataclass(frozen=True)
class NotesResult:
    """Finished notes plus how they were produced."""

    notes: str
    path: GenerationPath
    model_key: str
    units: int  # segments (direct/chunked) or outline sections (rag)


def select_path(
    transcript: str,
    profile: ModelProfile,
    options: NotesOptions,
    settings: Settings,
) -> GenerationPath:
    if options.rag.enabled:
        return GenerationPath.RAG
    if len(transcript) > settings.context_threshold * profile.context_window_tokens:
        return GenerationPath.CHUNKED
    return GenerationPath.DIRECT


def segment_limit(profile: ModelProfile, settings: Settings) -> int:
    """Maximum segment length in characters for the chunked path."""
    if settings.segment_max_chars > 0:
        return settings.segment_max_chars
    return int(profile.context_window_tokens * settings.context_threshold)


def default_index_factory(context: PipelineContext, rag: RagConfig) -> RetrievalIndex:
    return RetrievalIndex(
        namespace=rag.namespace or run_namespace(context.run_id),
        settings=context.settings,
        index_name=rag.index_name,
    )


def _run_direct(transcript: str, options: NotesOptions, context: PipelineContext) -> tuple[str, int]:
    context.emit("synthesize", "Generating notes from the full transcript", 1, 1)
    notes = NoteSynthesizer(context).synthesize(transcript, options.style)
    return notes, 1


def _run_chunked(transcript: str, options: NotesOptions, context: PipelineContext) -> tuple[str, int]:
    limit = segment_limit(context.profile, context.settings)
    segments = split_text(transcript, limit)
    logger.info("Split %d-char transcript into %d segments (limit %d)", len(transcript), len(segments), limit)

    synthesizer = NoteSynthesizer(context)
    segment_notes: list[str] = []
    for segment in segments:
        position = segment.index + 1
        context.emit("synthesize", "Generating notes for segment", position, segment.total_segments)
        prefix = None
        if segment.total_segments > 1:
            prefix = (
                f"This is part {position} of {segment.total_segments} of a longer transcript. "
                "Write notes for this part only; they will be merged with the notes "
                "for the other parts afterwards."
            )
        segment_notes.append(synthesizer.synthesize(segment.text, options.style, prefix))

    if len(segment_notes) > 1:
        context.emit("integrate", f"Merging {len(segment_notes)} segment notes")
        return Integrator(context).integrate(segment_notes, options.style), len(segments)
    return (segment_notes[0] if segment_notes else ""), len(segments)


def _release(index: RetrievalIndex) -> None:
    """Best-effort namespace cleanup; never masks the run's own outcome."""
    try:
        index.clear()
    except Exception:  # noqa: BLE001
        logger.warning("Failed to clear vector namespace %s", index.namespace, exc_info=True)


def _run_rag(
    transcript: str,
    options: NotesOptions,
    context: PipelineContext,
    index_factory: IndexFactory,
) -> tuple[str, int]:
    index = index_factory(context, options.rag)
    synthesizer = NoteSynthesizer(context)
    try:
        context.emit("index", f"Storing transcript in namespace {index.namespace}")
        index.store_transcript(transcript, {"runId": context.run_id})

        context.emit("outline", "Generating outline")
        points = parse_outline(synthesizer.synthesize_outline(options.style))
        if not points:
            raise ProviderError("Outline generation returned no topics")

        sections: list[str] = []
        for position, point in enumerate(points, 1):
            context.emit("section", point, position, len(points))
            results = index.query(point, context.settings.rag_top_k)
            sections.append(
                synthesizer.synthesize_section(point, [r.text for r in results], options.style)
            )
    finally:
        _release(index)

    return "\n\n".join(s for s in sections if s), len(points)


def generate_notes(
    transcript: str,
    options: NotesOptions | None = None,
    *,
    settings: Settings | None = None,
    gateway: ModelGateway | None = None,
    listener: ProgressListener | None = None,
    index_factory: IndexFactory | None = None,
) -> NotesResult:
    """Generate a notes document from *transcript*.

    Args:
        transcript: Full transcript text (may carry the no-audio marker).
        options: Model key, style, and RAG configuration.
        settings: Application settings; defaults to the cached instance.
        gateway: LLM gateway; defaults to one built from *settings*.
        listener: Receives :class:`~vidnotes.progress.ProgressEvent` values.
        index_factory: Builds the run's :class:`RetrievalIndex` (RAG path only).

    Raises:
        ConfigurationError: Unknown model key. Raised before any network call.
        NotesError: Any other pipeline failure.
    """
    settings = settings or get_settings()
    options = options or NotesOptions()
    model_key = options.model_key or settings.default_model
    profile = resolve_model(model_key)

    context = PipelineContext(
        settings=settings,
        profile=profile,
        gateway=gateway or ModelGateway(settings),
        listener=listener or null_listener,
    )
    path = select_path(transcript, profile, options, settings)
    logger.info("Run %s: %s path with %s", context.run_id, path.value, model_key)
    context.emit("plan", f"Using {path.value} path with {model_key}")

    if path is GenerationPath.RAG:
        notes, units = _run_rag(transcript, options, context, index_factory or default_index_factory)
    elif path is GenerationPath.CHUNKED:
        notes, units = _run_chunked(transcript, options, context)
    else:
        notes, units = _run_direct(transcript, options, context)

    context.emit("done", "Notes generated")
    return NotesResult(notes=notes.strip(), path=path, model_key=model_key, units=units)

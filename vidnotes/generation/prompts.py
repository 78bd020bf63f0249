"""Prompt text for note synthesis, outlines, sections, and integration."""

from __future__ import annotations

from vidnotes.pipeline_config import DetailLevel, NoteFormat, StyleOptions

NOTE_TAKER_SYSTEM_PROMPT = (
    "You are a professional note-taker who creates clear, accurate, "
    "well-structured notes from video content."
)

EDITOR_SYSTEM_PROMPT = (
    "You are an expert editor who merges partial sets of notes into one "
    "cohesive, well-organized document. You remove repetition, reconcile "
    "overlapping sections, and keep every substantive point."
)

FORMAT_INSTRUCTIONS: dict[NoteFormat, str] = {
    NoteFormat.DETAILED: (
        "Create detailed, comprehensive notes with main topics, subtopics, and key points"
    ),
    NoteFormat.CONCISE: (
        "Create concise, summarized notes highlighting only the most important concepts"
    ),
    NoteFormat.BULLET: (
        "Create organized bullet point notes structured in a hierarchical format"
    ),
}

DETAIL_INSTRUCTIONS: dict[DetailLevel, str] = {
    DetailLevel.STANDARD: "Cover the main ideas and the most important supporting details.",
    DetailLevel.COMPREHENSIVE: (
        "Cover every topic discussed, including supporting details, examples, and explanations."
    ),
    DetailLevel.EXHAUSTIVE: (
        "Capture every substantive point, example, figure, definition, and nuance. "
        "Omit nothing of substance."
    ),
}

# Rough number of outline topics requested per detail level.
OUTLINE_SIZES: dict[DetailLevel, int] = {
    DetailLevel.STANDARD: 5,
    DetailLevel.COMPREHENSIVE: 8,
    DetailLevel.EXHAUSTIVE: 12,
}

STRUCTURE_REQUIREMENTS = """The notes should be well-formatted with:
- Clear section headings
- Logical organization of information
- Hierarchical structure when appropriate
- Key terms or concepts emphasized in **bold**"""


def language_instruction(style: StyleOptions) -> str:
    if style.language == "english":
        return ""
    return f"Write the notes in {style.language}."


def style_preamble(style: StyleOptions) -> str:
    """Tone, depth, and language directives shared by every note prompt."""
    parts = [
        f"{FORMAT_INSTRUCTIONS[style.format]}.",
        DETAIL_INSTRUCTIONS[style.detail],
        language_instruction(style),
    ]
    return " ".join(p for p in parts if p)


def notes_prompt(text: str, style: StyleOptions, context_prefix: str | None = None) -> str:
    prefix = f"{context_prefix.strip()}\n\n" if context_prefix else ""
    return f"""{prefix}I have a video transcript and I need you to generate intelligent notes from it.
{style_preamble(style)}

Focus on identifying key concepts, main points, important details, and organizing them logically.
Do NOT provide a verbatim transcript - instead, extract and synthesize the important information.
Include relevant section headings and organize the content in a clear, structured way.

{STRUCTURE_REQUIREMENTS}

Here is the transcript:
{text}"""


def no_audio_prompt(style: StyleOptions) -> str:
    return f"""I need you to generate notes for a video that appears to have no audio content.
Please create {style.format.value} notes that explain:
1. This video doesn't have audio content to transcribe
2. Suggest to the user that they may want to check if the video actually has audio
3. Remind them that they can also try providing a different video source
{language_instruction(style)}""".rstrip()


def outline_prompt(style: StyleOptions) -> str:
    count = OUTLINE_SIZES[style.detail]
    return f"""Draft a generic outline for {style.format.value} notes on a recorded talk or video.
{DETAIL_INSTRUCTIONS[style.detail]} {language_instruction(style)}

List about {count} section topics that notes of this kind usually need, in the
order they should appear (for example an overview first and takeaways last).
Return only the outline: one topic per line, no numbering commentary or extra text."""


def section_prompt(topic: str, context_texts: list[str], style: StyleOptions) -> str:
    excerpts = "\n\n".join(
        f"[Excerpt {i + 1}]\n{text}" for i, text in enumerate(context_texts)
    ) or "(no relevant excerpts were found)"
    return f"""Write the section of the notes covering: {topic}
{style_preamble(style)}

Use only the transcript excerpts below as your source. If they contain nothing
relevant to this topic, write a single short line saying so instead of inventing content.
Start the section with a level-2 Markdown heading naming the topic.
Do NOT copy the excerpts verbatim - synthesize them. Emphasize key terms in **bold**.

Transcript excerpts:
{excerpts}"""


def integration_prompt(notes: list[str], style: StyleOptions) -> str:
    total = len(notes)
    parts = "\n\n".join(
        f"=== PART {i + 1} OF {total} ===\n{text}" for i, text in enumerate(notes)
    )
    return f"""The following {total} sets of notes were written from consecutive parts of
one video transcript, in order. Merge them into a single cohesive document.

- Remove redundancy and repeated introductions or conclusions between parts.
- Keep headings, bullet styles, and emphasis consistent throughout.
- Preserve the original order of the material.
- Keep the requested style: {FORMAT_INSTRUCTIONS[style.format].lower()}.
- Keep the requested depth: {DETAIL_INSTRUCTIONS[style.detail]}
{language_instruction(style)}

Return only the merged notes.

{parts}"""

"""Transcript readers: turn VTT, plain-text, or JSON ASR output into a transcript string."""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from pathlib import Path

from vidnotes.ingestion.models import TranscriptSegment

# Emitted by the speech-recognition step when the source has no audio stream.
NO_AUDIO_MARKER = "[This video appears to have no audio content to transcribe]"
_NO_AUDIO_PREFIX = "[This video appears to have no audio content"

_TIMESTAMP_RE = re.compile(
    r"(\d{1,2}:\d{2}:\d{2}[.,]\d{3}|\d{2}:\d{2}[.,]\d{3})\s*-->\s*"
    r"(\d{1,2}:\d{2}:\d{2}[.,]\d{3}|\d{2}:\d{2}[.,]\d{3})"
)
_SPEAKER_RE = re.compile(r"^([^:]{1,40}?):\s+(.+)$")
# <v Name>text</v>; the closing tag is optional in WebVTT.
_VOICE_TAG_RE = re.compile(r"^<v ([^>]+)>(.*?)(?:</v>)?$", re.DOTALL)


def is_no_audio(transcript: str) -> bool:
    """True when *transcript* is blank or carries the no-audio sentinel."""
    return not transcript.strip() or _NO_AUDIO_PREFIX in transcript


def _seconds(ts: str) -> float:
    parts = ts.replace(",", ".").split(":")
    if len(parts) == 2:
        parts.insert(0, "0")
    hours, minutes, seconds = parts
    return int(hours) * 3600 + int(minutes) * 60 + float(seconds)


def _split_speaker(text: str) -> tuple[str | None, str]:
    voice = _VOICE_TAG_RE.match(text)
    if voice:
        return voice.group(1).strip(), voice.group(2).strip()
    labelled = _SPEAKER_RE.match(text)
    if labelled:
        return labelled.group(1), labelled.group(2)
    return None, text


def parse_vtt(content: str) -> list[TranscriptSegment]:
    """Parse WebVTT cues, picking up ``Name:`` labels and ``<v Name>`` voice tags."""
    segments: list[TranscriptSegment] = []
    lines = content.strip().splitlines()
    i = 0
    while i < len(lines):
        match = _TIMESTAMP_RE.search(lines[i])
        i += 1
        if not match:
            continue

        cue: list[str] = []
        while i < len(lines) and lines[i].strip() and not _TIMESTAMP_RE.search(lines[i]):
            cue.append(lines[i].strip())
            i += 1

        speaker, text = _split_speaker(" ".join(cue))
        if text:
            segments.append(
                TranscriptSegment(
                    speaker=speaker,
                    text=text,
                    start_time=_seconds(match.group(1)),
                    end_time=_seconds(match.group(2)),
                )
            )
    return segments


def parse_plain_text(content: str) -> list[TranscriptSegment]:
    """Parse plain text.

    Blank lines separate paragraphs. A line starting with ``Speaker X:``
    opens a new segment for that speaker; unlabelled lines continue the
    segment above them (wrapped prose).
    """
    segments: list[TranscriptSegment] = []
    for block in re.split(r"\n\s*\n", content.strip()):
        current: TranscriptSegment | None = None
        for line in block.splitlines():
            line = line.strip()
            if not line:
                continue
            speaker, text = _split_speaker(line)
            if current is None or speaker is not None:
                current = TranscriptSegment(speaker=speaker, text=text)
                segments.append(current)
            else:
                current.text = f"{current.text} {text}"
    return segments


def parse_json(content: str) -> list[TranscriptSegment]:
    """Parse a JSON transcript.

    Supported shapes::

        {"utterances": [{"speaker": "A", "text": "...", "start": ms, "end": ms}]}
        {"segments": [{"speaker": "...", "text": "...", "start_time": s, "end_time": s}]}
        {"text": "..."}
    """
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError("JSON transcript must be an object")

    if "utterances" in data:
        # AssemblyAI: times in milliseconds
        return [
            TranscriptSegment(
                speaker=utt.get("speaker"),
                text=utt["text"],
                start_time=utt.get("start", 0) / 1000.0,
                end_time=utt.get("end", 0) / 1000.0,
            )
            for utt in data["utterances"]
        ]
    if "segments" in data:
        return [
            TranscriptSegment(
                speaker=seg.get("speaker"),
                text=seg["text"].strip(),
                start_time=seg.get("start_time", seg.get("start")),
                end_time=seg.get("end_time", seg.get("end")),
            )
            for seg in data["segments"]
        ]
    if isinstance(data.get("text"), str):
        return parse_plain_text(data["text"])

    msg = f"Unrecognized JSON transcript format. Keys: {list(data.keys())}"
    raise ValueError(msg)


_PARSERS: dict[str, Callable[[str], list[TranscriptSegment]]] = {
    "vtt": parse_vtt,
    "text": parse_plain_text,
    "plain_text": parse_plain_text,
    "txt": parse_plain_text,
    "md": parse_plain_text,
    "json": parse_json,
}


def parse_transcript(content: str, format: str) -> list[TranscriptSegment]:
    """Dispatch to the parser registered for *format*.

    Raises:
        ValueError: If *format* is not recognized.
    """
    parser = _PARSERS.get(format.lower())
    if parser is None:
        msg = f"Unknown transcript format: {format!r}. Supported: {list(_PARSERS.keys())}"
        raise ValueError(msg)
    return parser(content)


def render_transcript(segments: list[TranscriptSegment]) -> str:
    """Flatten segments into transcript text, one paragraph per speaker turn.

    Consecutive segments by the same speaker share a paragraph, so
    paragraph-based segmentation later splits on turn boundaries.
    """
    paragraphs: list[tuple[str | None, list[str]]] = []
    for seg in segments:
        if not seg.text:
            continue
        if paragraphs and seg.speaker is not None and paragraphs[-1][0] == seg.speaker:
            paragraphs[-1][1].append(seg.text)
        else:
            paragraphs.append((seg.speaker, [seg.text]))

    rendered = []
    for speaker, texts in paragraphs:
        body = " ".join(texts)
        rendered.append(f"{speaker}: {body}" if speaker else body)
    return "\n\n".join(rendered)


def load_transcript(path: str | Path, format: str | None = None) -> str:
    """Read a transcript file and return it as a transcript string.

    The format is taken from the file extension unless given explicitly.
    """
    path = Path(path)
    fmt = format or path.suffix.lstrip(".") or "text"
    content = path.read_text(encoding="utf-8")
    return render_transcript(parse_transcript(content, fmt))

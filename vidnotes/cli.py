"""Command-line entry point: ``vidnotes generate | models | check | serve``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import uvicorn

from vidnotes.config import Settings, get_settings
from vidnotes.errors import NotesError
from vidnotes.generation.registry import available_models, resolve_model
from vidnotes.ingestion.parsers import load_transcript
from vidnotes.logging_config import configure_logging, quiet_loggers
from vidnotes.pipeline import generate_notes
from vidnotes.pipeline_config import (
    DetailLevel,
    NoteFormat,
    NotesOptions,
    RagConfig,
    StyleOptions,
)
from vidnotes.progress import LoggingProgressListener


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vidnotes",
        description="Generate structured notes from a video transcript.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: from settings)")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate notes from a transcript file")
    gen.add_argument("-i", "--input", required=True, type=Path, help="Transcript file (.txt, .vtt, .json)")
    gen.add_argument("-o", "--output", type=Path, default=None, help="Output Markdown file")
    gen.add_argument("-m", "--model", default=None, help=f"Model key ({', '.join(available_models())})")
    gen.add_argument(
        "-f",
        "--format",
        choices=[f.value for f in NoteFormat],
        default=NoteFormat.DETAILED.value,
    )
    gen.add_argument(
        "-d",
        "--detail",
        choices=[d.value for d in DetailLevel],
        default=DetailLevel.STANDARD.value,
    )
    gen.add_argument("-l", "--language", default="english", help="Language of the notes")
    gen.add_argument("--transcript-format", default=None, help="Override format inferred from extension")
    gen.add_argument("--rag", action="store_true", help="Use retrieval-augmented generation")
    gen.add_argument("--index-name", default=None, help="Pinecone index name (with --rag)")
    gen.add_argument("--namespace", default=None, help="Pinecone namespace (with --rag)")

    sub.add_parser("models", help="List available models")
    sub.add_parser("check", help="Report which credentials are configured")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help="Bind address (default: API_HOST)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: API_PORT)")
    return parser


def default_output(input_path: Path) -> Path:
    return Path.cwd() / "notes" / f"{input_path.stem}_notes.md"


def cmd_generate(args: argparse.Namespace, settings: Settings) -> int:
    transcript = load_transcript(args.input, args.transcript_format)
    options = NotesOptions(
        model_key=args.model,
        style=StyleOptions(format=args.format, detail=args.detail, language=args.language),
        rag=RagConfig(enabled=args.rag, index_name=args.index_name, namespace=args.namespace),
    )

    result = generate_notes(
        transcript,
        options,
        settings=settings,
        listener=LoggingProgressListener(),
    )

    output = args.output or default_output(args.input)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result.notes + "\n", encoding="utf-8")
    print(f"Notes saved to {output} ({result.path.value} path, {result.units} unit(s))")
    return 0


def cmd_models() -> int:
    for key in available_models():
        profile = resolve_model(key)
        print(f"{key:<20} {profile.provider:<10} {profile.canonical_name:<32} {profile.context_window_tokens:>8}")
    return 0


def cmd_check(settings: Settings) -> int:
    checks = [
        ("ANTHROPIC_API_KEY", settings.anthropic_api_key, "Claude models"),
        ("OPENAI_API_KEY", settings.openai_api_key, "GPT models and embeddings"),
        ("PINECONE_API_KEY", settings.pinecone_api_key, "--rag"),
    ]
    for name, value, used_for in checks:
        status = "configured" if value else "missing"
        print(f"{name:<20} {status:<11} (needed for {used_for})")
    # At least one LLM provider must be usable.
    return 0 if settings.anthropic_api_key or settings.openai_api_key else 1


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    uvicorn.run(
        "vidnotes.api.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        log_level=settings.log_level.lower(),
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    try:
        with quiet_loggers():
            if args.command == "generate":
                return cmd_generate(args, settings)
            if args.command == "models":
                return cmd_models()
            if args.command == "serve":
                return cmd_serve(args, settings)
            return cmd_check(settings)
    except (NotesError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

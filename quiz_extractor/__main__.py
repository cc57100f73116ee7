"""CLI entry point for quiz-extractor.

Usage:
  python -m quiz_extractor serve [--port PORT] [--host HOST]
  python -m quiz_extractor extract FILE [--output OUT] [--strict]
"""
from __future__ import annotations

import sys
from pathlib import Path


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "extract":
        _extract(args[1:])
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, extract")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _serve(args: list[str]):
    import uvicorn

    from quiz_extractor.config import load_settings

    settings = load_settings()
    port = int(_parse_flag(args, "--port", str(settings.port)))
    host = _parse_flag(args, "--host", settings.host)

    print(f"Starting Quiz Extractor on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    uvicorn.run(
        "quiz_extractor.app:app",
        host=host,
        port=port,
        reload=False,
        timeout_graceful_shutdown=5,
    )


def _extract(args: list[str]):
    from quiz_extractor.config import load_settings
    from quiz_extractor.errors import ExtractionError
    from quiz_extractor.parsers.question_parser import (
        count_boundaries,
        extract_questions,
        questions_to_json,
    )
    from quiz_extractor.stats import text_stats

    positional = [a for i, a in enumerate(args)
                  if not a.startswith("--") and (i == 0 or args[i - 1] != "--output")]
    if not positional:
        print("Usage: python -m quiz_extractor extract FILE [--output OUT] [--strict]")
        sys.exit(1)

    path = Path(positional[0])
    if not path.exists():
        print(f"File not found: {path}")
        sys.exit(1)

    settings = load_settings()
    strict = "--strict" in args or settings.strict_mode
    text = path.read_text(encoding="utf-8-sig")
    markers = settings.marker_table()

    try:
        questions = extract_questions(text, markers, strict=strict)
    except ExtractionError as e:
        print(f"Extraction failed: {e}")
        sys.exit(1)

    stats = text_stats(text, settings.words_per_page)
    output = Path(_parse_flag(args, "--output", str(path.with_suffix(".json"))))
    output.write_text(questions_to_json(questions), encoding="utf-8")

    answered = sum(1 for q in questions if q.correct_index is not None)
    print(f"Parsed: {path.name}")
    print(f"  {stats.word_count} words, {stats.character_count} characters, ~{stats.page_count} pages")
    print(f"  {len(questions)}/{count_boundaries(text, markers)} segments became questions")
    print(f"  {answered} with a resolved correct answer")
    print(f"Wrote {output}")


if __name__ == "__main__":
    main()

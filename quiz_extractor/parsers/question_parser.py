"""Parse quiz transcript text into Question objects.

The text is split into segments at every boundary marker ("Đoạn văn câu
hỏi"). Each segment is scanned independently for its prompt, the four
lettered answers, the stated correct answer, an explanation and a
reference. A segment without a prompt or without any answer is dropped.
"""
from __future__ import annotations

import json
import logging

from quiz_extractor.errors import SegmentError
from quiz_extractor.markers import (
    ANSWER_LETTERS,
    DEFAULT_MARKERS,
    MarkerTable,
    boundary_pattern,
    field_delimiters,
    prompt_pattern,
)
from quiz_extractor.models import Answer, Question

log = logging.getLogger(__name__)


def split_segments(text: str, markers: MarkerTable = DEFAULT_MARKERS) -> list[str]:
    """Split text so that each segment starts at a boundary marker.

    Text before the first boundary is preamble and is discarded.
    """
    boundary = boundary_pattern(markers)
    starts = [m.start() for m in boundary.finditer(text)]
    segments: list[str] = []
    for i, start in enumerate(starts):
        end = starts[i + 1] if i + 1 < len(starts) else len(text)
        segment = text[start:end]
        if not segment.strip() or not boundary.search(segment):
            continue
        segments.append(segment)
    return segments


def resolve_correct_index(statement: str | None, answer_count: int) -> int | None:
    """Map the first letter of the correct-answer statement to an answer index.

    Only the first character counts: "both b and c" resolves to b. Returns
    None when the letter is not a-d or no answer exists at that position.
    """
    if not statement:
        return None
    letter = statement.strip()[:1].lower()
    if letter not in ANSWER_LETTERS:
        return None
    idx = ANSWER_LETTERS.index(letter)
    if idx >= answer_count:
        return None
    return idx


def _extract_answers(segment: str, delimiters: dict) -> list[str]:
    texts = []
    for letter in ANSWER_LETTERS:
        text = delimiters[f"answer_{letter}"].search(segment)
        if text is not None:
            texts.append(text)
    return texts


def parse_segment(
    segment: str,
    markers: MarkerTable = DEFAULT_MARKERS,
    *,
    index: int = 0,
    strict: bool = False,
) -> Question | None:
    m = prompt_pattern(markers).search(segment)
    prompt = m.group(1).strip() if m else ""
    if not prompt:
        if strict:
            raise SegmentError(index, "missing prompt")
        log.debug("Segment %d dropped: no prompt", index)
        return None

    delimiters = field_delimiters(markers)
    texts = _extract_answers(segment, delimiters)
    if not texts:
        if strict:
            raise SegmentError(index, "no answers")
        log.debug("Segment %d dropped: no answers", index)
        return None

    correct = delimiters["correct_answer"].search(segment) or None
    correct_idx = resolve_correct_index(correct, len(texts))
    answers = tuple(
        Answer(text=t, is_correct=(i == correct_idx)) for i, t in enumerate(texts)
    )

    return Question(
        prompt=prompt,
        answers=answers,
        correct_answer=correct,
        explanation=delimiters["explanation"].search(segment) or None,
        reference=delimiters["reference"].search(segment) or None,
    )


def extract_questions(
    text: str,
    markers: MarkerTable = DEFAULT_MARKERS,
    *,
    strict: bool = False,
) -> list[Question]:
    """Extract every well-formed question from *text*, in source order.

    In the default lenient mode this never raises: malformed segments are
    skipped. With strict=True a malformed segment raises SegmentError.
    """
    questions: list[Question] = []
    segments = split_segments(text, markers)
    for i, segment in enumerate(segments):
        q = parse_segment(segment, markers, index=i, strict=strict)
        if q is not None:
            questions.append(q)
    log.debug("Extracted %d question(s) from %d segment(s)", len(questions), len(segments))
    return questions


def questions_to_json(questions: list[Question]) -> str:
    return json.dumps([q.to_dict() for q in questions], ensure_ascii=False, indent=2)


def questions_from_json(raw: str) -> list[Question]:
    return [Question.from_dict(d) for d in json.loads(raw)]


def count_boundaries(text: str, markers: MarkerTable = DEFAULT_MARKERS) -> int:
    return len(boundary_pattern(markers).findall(text))

"""Marker vocabulary for quiz transcripts.

A transcript is a flat run of text where every field is delimited by a
fixed phrase:

  Đoạn văn câu hỏi: <prompt> Select one a. .. b. .. c. .. d. ..
  Phản hồi ... Đáp án đúng là: <letter ...> Vì: <explanation>
  Tham khảo: <reference>

The phrases live in a MarkerTable so other fixed-phrase formats can be
parsed by swapping the table, without touching the extraction algorithm.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace

ANSWER_LETTERS = ("a", "b", "c", "d")


@dataclass(frozen=True)
class MarkerTable:
    boundary: str = "Đoạn văn câu hỏi"
    select_one: str = "Select one"
    answer_a: str = "a."
    answer_b: str = "b."
    answer_c: str = "c."
    answer_d: str = "d."
    response: str = "Phản hồi"
    correct_answer: str = "Đáp án đúng là:"
    because: str = "Vì:"
    reference: str = "Tham khảo:"
    question: str = "Câu hỏi"

    @property
    def answer_markers(self) -> tuple[str, str, str, str]:
        return (self.answer_a, self.answer_b, self.answer_c, self.answer_d)

    def with_overrides(self, overrides: dict[str, str]) -> MarkerTable:
        """Return a copy with the given phrases replaced. Unknown names raise ValueError."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown marker name(s): {', '.join(unknown)}")
        empty = sorted(k for k, v in overrides.items() if not v or not v.strip())
        if empty:
            raise ValueError(f"Marker phrase(s) must not be empty: {', '.join(empty)}")
        return replace(self, **overrides)


DEFAULT_MARKERS = MarkerTable()


@dataclass(frozen=True)
class Delimiter:
    """A named field: text after `start` up to the first of `ends`.

    `until_end` lets the end of the segment terminate the field as well.
    `fallback_ends` are only tried when none of `ends` closes the field.
    """
    name: str
    start: str
    ends: tuple[str, ...]
    until_end: bool = False
    fallback_ends: tuple[str, ...] = ()

    def _compile(self, ends: tuple[str, ...], until_end: bool) -> re.Pattern:
        stops = [re.escape(e) for e in ends]
        if until_end:
            stops.append(r"\Z")
        return re.compile(
            re.escape(self.start) + r"\s*(.*?)(?=" + "|".join(stops) + ")",
            re.IGNORECASE | re.DOTALL,
        )

    def search(self, segment: str) -> str | None:
        """Return the trimmed field text, or None when the delimiters aren't found."""
        m = self._compile(self.ends, self.until_end).search(segment)
        if m is None and self.fallback_ends:
            m = self._compile(self.fallback_ends, self.until_end).search(segment)
        if m is None:
            return None
        return m.group(1).strip()


def field_delimiters(markers: MarkerTable) -> dict[str, Delimiter]:
    """Build the ordered delimiter pairs for every field except the prompt."""
    a, b, c, d = markers.answer_markers
    return {
        "answer_a": Delimiter("answer_a", a, (b,)),
        "answer_b": Delimiter("answer_b", b, (c,)),
        "answer_c": Delimiter("answer_c", c, (d,)),
        "answer_d": Delimiter(
            "answer_d", d, (markers.response,),
            fallback_ends=(markers.correct_answer,),
        ),
        "correct_answer": Delimiter(
            "correct_answer", markers.correct_answer, (markers.because,), until_end=True,
        ),
        "explanation": Delimiter(
            "explanation", markers.because,
            (markers.reference, markers.question), until_end=True,
        ),
        "reference": Delimiter(
            "reference", markers.reference, (markers.question,), until_end=True,
        ),
    }


def prompt_pattern(markers: MarkerTable) -> re.Pattern:
    # Boundary, optional ":" or "-", then everything up to "Select one".
    return re.compile(
        re.escape(markers.boundary) + r"\s*[:\-]?\s*(.*?)(?=" + re.escape(markers.select_one) + ")",
        re.IGNORECASE | re.DOTALL,
    )


def boundary_pattern(markers: MarkerTable) -> re.Pattern:
    return re.compile(re.escape(markers.boundary), re.IGNORECASE)

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Answer:
    text: str
    is_correct: bool = False

    def to_dict(self) -> dict:
        return {"text": self.text, "isCorrect": self.is_correct}


@dataclass(frozen=True)
class Question:
    prompt: str
    answers: tuple[Answer, ...]
    correct_answer: str | None = None  # raw statement, e.g. "b. 4"
    explanation: str | None = None
    reference: str | None = None

    @property
    def correct_index(self) -> int | None:
        for i, a in enumerate(self.answers):
            if a.is_correct:
                return i
        return None

    def to_dict(self) -> dict:
        """Serialize to the JSON shape stored on documents and served by the API."""
        d: dict = {
            "question": self.prompt,
            "answers": [a.to_dict() for a in self.answers],
        }
        if self.correct_answer is not None:
            d["correctAnswer"] = self.correct_answer
        if self.explanation is not None:
            d["explain"] = self.explanation
        if self.reference is not None:
            d["reference"] = self.reference
        return d

    @classmethod
    def from_dict(cls, d: dict) -> Question:
        return cls(
            prompt=d["question"],
            answers=tuple(
                Answer(text=a["text"], is_correct=a.get("isCorrect", False))
                for a in d.get("answers", [])
            ),
            correct_answer=d.get("correctAnswer"),
            explanation=d.get("explain"),
            reference=d.get("reference"),
        )


@dataclass(frozen=True)
class TextStats:
    word_count: int
    character_count: int
    page_count: int


@dataclass
class Document:
    id: str
    filename: str
    original_size: int
    created_at: str
    processing_status: str = "pending"  # pending | processing | completed | failed
    extracted_text: str | None = None
    extracted_questions: str | None = None  # JSON list of Question.to_dict()
    word_count: int | None = None
    character_count: int | None = None
    page_count: int | None = None
    question_count: int | None = None
    conversion_time: int | None = None  # ms
    completed_at: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "filename": self.filename,
            "originalSize": self.original_size,
            "extractedText": self.extracted_text,
            "extractedQuestions": self.extracted_questions,
            "wordCount": self.word_count,
            "characterCount": self.character_count,
            "pageCount": self.page_count,
            "questionCount": self.question_count,
            "processingStatus": self.processing_status,
            "conversionTime": self.conversion_time,
            "createdAt": self.created_at,
            "completedAt": self.completed_at,
        }

"""Run the extractor over an uploaded document and record the results."""
from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from quiz_extractor.config import Settings
from quiz_extractor.db import Database
from quiz_extractor.parsers.question_parser import extract_questions, questions_to_json
from quiz_extractor.stats import text_stats

log = logging.getLogger("quiz_extractor.processing")


def decode_upload(data: bytes) -> str:
    """Decode an uploaded text document. Raises ValueError for non-text payloads."""
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ValueError("Only UTF-8 plain-text documents are accepted") from e
    if "\x00" in text:
        raise ValueError("Only UTF-8 plain-text documents are accepted")
    return text


def process_document(db: Database, settings: Settings, document_id: str, text: str) -> None:
    """Extract questions from *text* and store them on the document.

    Any failure marks the document as failed; finding zero questions is a
    normal completed result.
    """
    start = time.monotonic()
    db.update_document(document_id, processing_status="processing")
    try:
        questions = extract_questions(
            text, settings.marker_table(), strict=settings.strict_mode,
        )
        stats = text_stats(text, settings.words_per_page)
        elapsed_ms = int((time.monotonic() - start) * 1000)
        db.update_document(
            document_id,
            extracted_text=text,
            extracted_questions=questions_to_json(questions),
            word_count=stats.word_count,
            character_count=stats.character_count,
            page_count=stats.page_count,
            question_count=len(questions),
            processing_status="completed",
            conversion_time=elapsed_ms,
            completed_at=datetime.now(timezone.utc).isoformat(),
        )
        log.info("Document %s processed in %dms: %d questions",
                 document_id, elapsed_ms, len(questions))
    except Exception as e:
        log.warning("Document processing failed for %s: %s", document_id, e)
        db.update_document(
            document_id,
            processing_status="failed",
            conversion_time=int((time.monotonic() - start) * 1000),
        )


def reprocess_document(db: Database, settings: Settings, document_id: str) -> int:
    """Re-run extraction on a document's stored text. Returns the new question count.

    Raises KeyError if the document doesn't exist and ValueError if it has no
    extracted text yet.
    """
    doc = db.get_document(document_id)
    if doc is None:
        raise KeyError(document_id)
    if doc.extracted_text is None:
        raise ValueError("Document not yet processed")
    questions = extract_questions(
        doc.extracted_text, settings.marker_table(), strict=settings.strict_mode,
    )
    db.update_document(
        document_id,
        extracted_questions=questions_to_json(questions),
        question_count=len(questions),
    )
    log.info("Document %s reprocessed with %d questions", document_id, len(questions))
    return len(questions)

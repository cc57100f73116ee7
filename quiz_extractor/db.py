from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime, timezone

from quiz_extractor.models import Document

SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    id TEXT PRIMARY KEY,
    filename TEXT NOT NULL,
    original_size INTEGER NOT NULL,
    extracted_text TEXT,
    extracted_questions TEXT,
    word_count INTEGER,
    character_count INTEGER,
    page_count INTEGER,
    question_count INTEGER,
    processing_status TEXT NOT NULL DEFAULT 'pending',
    conversion_time INTEGER,
    created_at TEXT NOT NULL,
    completed_at TEXT
);
"""

# Columns a caller may change through update_document()
UPDATABLE = (
    "extracted_text",
    "extracted_questions",
    "word_count",
    "character_count",
    "page_count",
    "question_count",
    "processing_status",
    "conversion_time",
    "completed_at",
)

STATUSES = ("pending", "processing", "completed", "failed")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Database:
    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        self.conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self) -> None:
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    @staticmethod
    def _row_to_document(row: sqlite3.Row) -> Document:
        return Document(**{k: row[k] for k in row.keys()})

    # ── Documents ─────────────────────────────────────────────────────────

    def create_document(self, filename: str, original_size: int) -> Document:
        doc = Document(
            id=str(uuid.uuid4()),
            filename=filename,
            original_size=original_size,
            created_at=_now(),
        )
        self.conn.execute(
            "INSERT INTO documents (id, filename, original_size, processing_status, created_at) "
            "VALUES (?, ?, ?, ?, ?)",
            (doc.id, doc.filename, doc.original_size, doc.processing_status, doc.created_at),
        )
        self.conn.commit()
        return doc

    def get_document(self, document_id: str) -> Document | None:
        row = self.conn.execute(
            "SELECT * FROM documents WHERE id = ?", (document_id,)
        ).fetchone()
        return self._row_to_document(row) if row else None

    def update_document(self, document_id: str, **updates) -> Document | None:
        """Apply a partial update. Returns the updated document, or None if missing."""
        unknown = sorted(set(updates) - set(UPDATABLE))
        if unknown:
            raise ValueError(f"Cannot update column(s): {', '.join(unknown)}")
        status = updates.get("processing_status")
        if status is not None and status not in STATUSES:
            raise ValueError(f"Unknown processing status: {status}")
        if updates:
            assignments = ", ".join(f"{k} = ?" for k in updates)
            cur = self.conn.execute(
                f"UPDATE documents SET {assignments} WHERE id = ?",
                (*updates.values(), document_id),
            )
            self.conn.commit()
            if cur.rowcount == 0:
                return None
        return self.get_document(document_id)

    def get_all_documents(self) -> list[Document]:
        """All documents, newest first."""
        rows = self.conn.execute(
            "SELECT * FROM documents ORDER BY created_at DESC, rowid DESC"
        ).fetchall()
        return [self._row_to_document(r) for r in rows]

    def get_document_count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM documents").fetchone()[0]

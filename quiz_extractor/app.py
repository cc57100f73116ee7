"""FastAPI application with all routes."""
from __future__ import annotations

import json
import logging
import re
import unicodedata
from dataclasses import replace
from pathlib import PurePath
from urllib.parse import quote

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import BackgroundTasks, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import Response

from quiz_extractor.config import Settings, load_settings, save_settings, validate_settings
from quiz_extractor.db import Database
from quiz_extractor.errors import ExtractionError
from quiz_extractor.parsers.question_parser import extract_questions, questions_from_json
from quiz_extractor.processing import decode_upload, process_document, reprocess_document

app = FastAPI(title="Quiz Extractor")

log = logging.getLogger("quiz_extractor.app")

# Global state (initialized in startup)
_db: Database | None = None
_settings: Settings | None = None


def get_db() -> Database:
    assert _db is not None
    return _db


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


@app.on_event("startup")
async def startup():
    global _db, _settings
    if _db is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    _db = Database(_settings.db_full_path)


@app.on_event("shutdown")
async def shutdown():
    if _db:
        _db.close()


def _get_document_or_404(document_id: str):
    doc = get_db().get_document(document_id)
    if doc is None:
        raise HTTPException(404, "Document not found")
    return doc


def _attachment_name(filename: str, suffix: str) -> str:
    return PurePath(filename).with_suffix(suffix).name


def _content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback name and an RFC 5987 UTF-8 name."""
    ascii_name = re.sub(r"[đĐ]", lambda m: "d" if m.group() == "đ" else "D", filename)
    ascii_name = unicodedata.normalize("NFKD", ascii_name).encode("ascii", "ignore").decode()
    ascii_name = re.sub(r'["\\\r\n]', "_", ascii_name) or "download"
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename, safe='')}"


# ── API: Upload ───────────────────────────────────────────────────────────

@app.post("/api/documents/upload")
async def api_upload(background_tasks: BackgroundTasks, document: UploadFile | None = File(None)):
    if document is None or not document.filename:
        raise HTTPException(400, "No file uploaded")

    s = get_settings()
    data = await document.read()
    if not data:
        raise HTTPException(400, "Uploaded file is empty")
    if len(data) > s.max_upload_bytes:
        raise HTTPException(400, f"File too large (limit {s.max_upload_bytes} bytes)")
    try:
        text = decode_upload(data)
    except ValueError as e:
        raise HTTPException(400, str(e))

    db = get_db()
    doc = db.create_document(filename=document.filename, original_size=len(data))
    log.info("Uploaded %s (%d bytes) as %s", doc.filename, doc.original_size, doc.id)

    background_tasks.add_task(process_document, db, s, doc.id, text)
    return {"documentId": doc.id, "message": "File uploaded successfully"}


# ── API: Documents ────────────────────────────────────────────────────────

@app.get("/api/documents")
async def api_documents():
    return [d.to_dict() for d in get_db().get_all_documents()]


@app.get("/api/documents/{document_id}")
async def api_document(document_id: str):
    return _get_document_or_404(document_id).to_dict()


@app.get("/api/documents/{document_id}/download")
async def api_download_text(document_id: str):
    doc = _get_document_or_404(document_id)
    if doc.extracted_text is None:
        raise HTTPException(400, "Document not yet processed")
    filename = _attachment_name(doc.filename, ".txt")
    return Response(
        content=doc.extracted_text,
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@app.get("/api/documents/{document_id}/download-json")
async def api_download_json(document_id: str):
    doc = _get_document_or_404(document_id)
    if doc.extracted_questions is None:
        raise HTTPException(400, "Questions not yet extracted")
    filename = _attachment_name(doc.filename, ".json")
    return Response(
        content=doc.extracted_questions,
        media_type="application/json",
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@app.get("/api/documents/{document_id}/questions")
async def api_questions(document_id: str):
    doc = _get_document_or_404(document_id)
    if doc.extracted_questions is None:
        raise HTTPException(400, "Questions not yet extracted")
    questions = questions_from_json(doc.extracted_questions)
    return {"questions": [q.to_dict() for q in questions], "count": len(questions)}


@app.post("/api/documents/{document_id}/reprocess")
async def api_reprocess(document_id: str):
    _get_document_or_404(document_id)
    try:
        count = reprocess_document(get_db(), get_settings(), document_id)
    except ExtractionError as e:
        raise HTTPException(422, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {"message": "Document reprocessed successfully", "questionCount": count}


# ── API: Direct extraction ────────────────────────────────────────────────

@app.post("/api/extract")
async def api_extract(request: Request):
    try:
        body = await request.json() if await request.body() else {}
    except json.JSONDecodeError:
        raise HTTPException(400, "Body must be JSON")
    text = body.get("text") if isinstance(body, dict) else None
    if not isinstance(text, str):
        raise HTTPException(400, "Body must contain a 'text' string")
    s = get_settings()
    try:
        questions = extract_questions(text, s.marker_table(), strict=s.strict_mode)
    except ExtractionError as e:
        raise HTTPException(422, str(e))
    return {"questions": [q.to_dict() for q in questions], "count": len(questions)}


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await request.json()
    if not isinstance(body, dict):
        raise HTTPException(400, "Body must be a JSON object")
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    updates = {k: v for k, v in body.items() if k in known}
    try:
        validate_settings(replace(s, **updates))
    except ValueError as e:
        raise HTTPException(400, str(e))
    for k, v in updates.items():
        setattr(s, k, v)
    save_settings(s)
    return s.to_dict()

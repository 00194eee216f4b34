# summarizer_api/routes/summaries.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..config import settings
from ..db import get_db
from ..models import User
from ..repos import summaries as repo
from ..schemas import (
    ReminderOut,
    SavedSummaryOut,
    SummarizeIn,
    SummarizeOut,
    SummaryCreate,
    SummaryOut,
    TranscriptUploadOut,
)
from ..services.interpreter import interpret_response
from ..services.webhook import WebhookError, notify_summary_deleted, summarize_via_webhook
from ..utils.io import decode_transcript_bytes, is_txt_upload

logger = logging.getLogger("summaries")

router = APIRouter(tags=["summaries"])

# ---------- Summarize (nothing is stored until the user saves) ----------
@router.post("/summarize", response_model=SummarizeOut)
def summarize(body: SummarizeIn, current: User = Depends(get_current_user)):
    if not body.transcript.strip():
        raise HTTPException(400, "Transcript cannot be empty.")

    if not settings.WEBHOOK_URL:
        raise HTTPException(500, "Summarization webhook is not configured")

    try:
        raw = summarize_via_webhook(body.transcript, settings.WEBHOOK_URL)
    except WebhookError as e:
        raise HTTPException(502, str(e))

    interp = interpret_response(raw)
    logger.info(f"[summarize] uid={current.id} structured={interp.structured} chars={len(interp.summary)}")
    return SummarizeOut(summary=interp.summary, structured=interp.structured, result=interp.result)

@router.post("/transcripts/upload", response_model=TranscriptUploadOut)
async def upload_transcript(
    file: UploadFile = File(...),
    current: User = Depends(get_current_user),
):
    name = file.filename or "transcript.txt"
    if not is_txt_upload(file.filename, file.content_type):
        raise HTTPException(400, f"Unsupported file: {name}; only .txt transcripts are accepted")
    text = decode_transcript_bytes(await file.read())
    return TranscriptUploadOut(filename=name, transcript=text)

# ---------- Saved summaries ----------
@router.get("/summaries", response_model=List[SummaryOut])
def list_summaries(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return repo.list_summaries(db, current.id)

@router.get("/summaries/{summary_id}", response_model=SummaryOut)
def get_summary(summary_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    s = repo.get_summary(db, current.id, summary_id)
    if not s:
        raise HTTPException(404, "Summary not found")
    return s

@router.post("/summaries", response_model=SavedSummaryOut, status_code=201)
def save_summary(body: SummaryCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    if not body.summary.strip():
        raise HTTPException(400, "Nothing to save: the summary is empty.")

    try:
        s, reminders = repo.save_summary_with_reminders(
            db, current.id, body.transcript, body.summary,
            result=body.result, structured=body.structured,
        )
    except SQLAlchemyError as e:
        logger.error(f"[summaries] save failed uid={current.id}: {e}")
        raise HTTPException(500, f"Failed to save summary: {e}")

    logger.info(f"[summaries] saved id={s.id} uid={current.id} reminders={len(reminders)}")
    return SavedSummaryOut(
        summary=SummaryOut.model_validate(s),
        reminders=[ReminderOut.model_validate(r) for r in reminders],
    )

@router.delete("/summaries/{summary_id}", status_code=204)
def delete_summary(summary_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    s = repo.get_summary(db, current.id, summary_id)
    if not s:
        raise HTTPException(404, "Summary not found")

    # best-effort; never blocks the delete
    notify_summary_deleted(current.name, current.email, s.summary, s.transcript)

    try:
        repo.delete_summary(db, s)
    except SQLAlchemyError as e:
        logger.error(f"[summaries] delete failed id={summary_id}: {e}")
        raise HTTPException(500, f"Could not delete summary: {e}")

    logger.info(f"[summaries] deleted id={summary_id} uid={current.id}")
    return Response(status_code=204)

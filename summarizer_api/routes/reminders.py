# summarizer_api/routes/reminders.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..db import get_db
from ..models import User
from ..repos import reminders as repo
from ..repos.summaries import get_summary
from ..schemas import ReminderCreate, ReminderOut

logger = logging.getLogger("reminders")

router = APIRouter(prefix="/reminders", tags=["reminders"])

@router.get("", response_model=List[ReminderOut])
def list_reminders(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return repo.list_reminders(db, current.id)

@router.post("", response_model=ReminderOut, status_code=201)
def add_reminder(body: ReminderCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    text = (body.text or "").strip()
    if not text or body.date is None:
        raise HTTPException(400, "Please provide both text and a date for the reminder.")

    if body.summary_id is not None and not get_summary(db, current.id, body.summary_id):
        raise HTTPException(404, "Linked summary not found")

    remind_at = repo.combine_date_time(body.date, body.time)
    try:
        r = repo.add_reminder(db, current.id, text, remind_at, summary_id=body.summary_id)
    except SQLAlchemyError as e:
        raise HTTPException(500, f"Failed to add reminder: {e}")

    logger.info(f"[reminders] manual id={r.id} uid={current.id} linked={r.summary_id is not None}")
    return r

@router.patch("/{reminder_id}/toggle", response_model=ReminderOut)
def toggle_reminder(reminder_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    r = repo.get_reminder(db, current.id, reminder_id)
    if not r:
        raise HTTPException(404, "Reminder not found")
    try:
        return repo.toggle_reminder(db, r)
    except SQLAlchemyError as e:
        raise HTTPException(500, f"Could not update reminder: {e}")

@router.delete("/{reminder_id}", status_code=204)
def delete_reminder(reminder_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    r = repo.get_reminder(db, current.id, reminder_id)
    if not r:
        raise HTTPException(404, "Reminder not found")
    try:
        repo.delete_reminder(db, r)
    except SQLAlchemyError as e:
        raise HTTPException(500, f"Could not delete reminder: {e}")
    return Response(status_code=204)

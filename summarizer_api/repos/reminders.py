# summarizer_api/repos/reminders.py
from datetime import date, datetime, time
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models import Reminder

def list_reminders(db: Session, user_id: int) -> List[Reminder]:
    return (
        db.query(Reminder)
        .filter(Reminder.user_id == user_id)
        .order_by(Reminder.remind_at.asc(), Reminder.id.asc())
        .all()
    )

def get_reminder(db: Session, user_id: int, reminder_id: int) -> Optional[Reminder]:
    return (
        db.query(Reminder)
        .filter(Reminder.id == reminder_id, Reminder.user_id == user_id)
        .first()
    )

def combine_date_time(day: date, hhmm: Optional[str]) -> datetime:
    """
    Midnight of `day`, moved to HH:MM when `hhmm` reads as one.
    A malformed time is ignored rather than rejected.
    """
    at = datetime.combine(day, time(0, 0))
    if not hhmm:
        return at
    try:
        hours, minutes = (int(p) for p in hhmm.strip().split(":")[:2])
        return at.replace(hour=hours, minute=minutes)
    except ValueError:
        return at

def add_reminder(
    db: Session,
    user_id: int,
    text: str,
    remind_at: datetime,
    summary_id: Optional[int] = None,
) -> Reminder:
    r = Reminder(user_id=user_id, text=text, remind_at=remind_at, summary_id=summary_id, completed=False)
    try:
        db.add(r); db.commit(); db.refresh(r)
    except Exception:
        db.rollback()
        raise
    return r

def toggle_reminder(db: Session, reminder: Reminder) -> Reminder:
    try:
        reminder.completed = not reminder.completed
        db.commit(); db.refresh(reminder)
    except Exception:
        db.rollback()
        raise
    return reminder

def delete_reminder(db: Session, reminder: Reminder) -> None:
    try:
        db.delete(reminder)
        db.commit()
    except Exception:
        db.rollback()
        raise

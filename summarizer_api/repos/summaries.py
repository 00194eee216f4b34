# summarizer_api/repos/summaries.py
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..models import Reminder, Summary
from ..schemas import ReminderCandidate, WebhookResult
from ..services.interpreter import Interpretation, extract_reminder_candidates
from ..utils.timefmt import to_naive_utc, utcnow

def list_summaries(db: Session, user_id: int) -> List[Summary]:
    return (
        db.query(Summary)
        .filter(Summary.user_id == user_id)
        .order_by(Summary.timestamp.desc(), Summary.id.desc())
        .all()
    )

def get_summary(db: Session, user_id: int, summary_id: int) -> Optional[Summary]:
    return (
        db.query(Summary)
        .filter(Summary.id == summary_id, Summary.user_id == user_id)
        .first()
    )

def derive_candidates(
    summary_text: str,
    summary_id: int,
    result: Optional[WebhookResult] = None,
    structured: Optional[bool] = None,
) -> List[ReminderCandidate]:
    """
    structured=False marks a plain-text webhook answer: no reminders, whatever the text says.
    A carried-forward result is used only while it still formats to the saved text.
    With neither hint the saved text is re-parsed.
    """
    if structured is False:
        result = None
    if structured is False or result is not None:
        return Interpretation(summary=summary_text, result=result).candidates(summary_id)
    return extract_reminder_candidates(summary_text, summary_id)

def save_summary_with_reminders(
    db: Session,
    user_id: int,
    transcript: str,
    summary_text: str,
    result: Optional[WebhookResult] = None,
    structured: Optional[bool] = None,
) -> Tuple[Summary, List[Reminder]]:
    """Insert the summary and its derived reminders in one transaction."""
    s = Summary(user_id=user_id, transcript=transcript, summary=summary_text, timestamp=utcnow())
    try:
        db.add(s)
        db.flush()  # need s.id for the reminders

        reminders = [
            Reminder(
                user_id=user_id,
                summary_id=s.id,
                text=c.text,
                remind_at=to_naive_utc(c.remind_at),
                completed=False,
            )
            for c in derive_candidates(summary_text, s.id, result, structured)
        ]
        db.add_all(reminders)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(s)
    reminders.sort(key=lambda r: (r.remind_at, r.id))
    return s, reminders

def delete_summary(db: Session, summary: Summary) -> None:
    # reminders go with it (ORM cascade + ON DELETE CASCADE)
    try:
        db.delete(summary)
        db.commit()
    except Exception:
        db.rollback()
        raise

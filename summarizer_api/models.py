# summarizer_api/models.py
from sqlalchemy import Boolean, Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from .db import Base
from .utils.timefmt import utcnow

# ---------- Users ----------
class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow)
    last_login = Column(DateTime, default=utcnow)

# ---------- Summaries ----------
class Summary(Base):
    __tablename__ = "summaries"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    transcript = Column(Text, nullable=False)
    # Canonical summary text, exactly as shown to the user
    summary = Column(Text, nullable=False)

    timestamp = Column(DateTime, default=utcnow, nullable=False)

    # Deleting a summary takes its derived and linked reminders with it
    reminders = relationship(
        "Reminder",
        back_populates="summary",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

# ---------- Reminders ----------
class Reminder(Base):
    __tablename__ = "reminders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # NULL = standalone reminder
    summary_id = Column(Integer, ForeignKey("summaries.id", ondelete="CASCADE"), nullable=True, index=True)

    text = Column(Text, nullable=False)
    remind_at = Column(DateTime, nullable=False, index=True)  # naive UTC
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)

    summary = relationship("Summary", back_populates="reminders")

# summarizer_api/schemas.py
from datetime import date as calendar_date, datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_serializer

from .utils.timefmt import to_iso_z

# ---------- Webhook result (structured shape) ----------
class ActionItem(BaseModel):
    task: str = ""
    assignee: str = ""
    due_date: str = ""

class FollowUpReminder(BaseModel):
    reminder: str = ""
    due_date: str = ""
    context: str = ""

class WebhookResult(BaseModel):
    summary: str
    action_items: list[ActionItem] = Field(default_factory=list)
    decisions_made: list[str] = Field(default_factory=list)
    follow_up_reminders: list[FollowUpReminder] = Field(default_factory=list)

class ReminderCandidate(BaseModel):
    text: str
    remind_at: datetime  # UTC
    summary_id: Optional[int] = None

    @field_serializer("remind_at")
    def _ser_remind_at(self, v: datetime) -> str:
        return to_iso_z(v)

# ---------- Auth ----------
class SignupIn(BaseModel):
    full_name: str
    email: EmailStr
    password: str = Field(min_length=6)

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class UserMeOut(BaseModel):
    id: int
    email: EmailStr
    name: Optional[str] = None
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True

# ---------- Summarize ----------
class SummarizeIn(BaseModel):
    transcript: str

class SummarizeOut(BaseModel):
    summary: str                               # canonical text, what the big box shows
    structured: bool                           # False = webhook answered in plain text
    result: Optional[WebhookResult] = None     # carry back on save to skip re-parsing

class TranscriptUploadOut(BaseModel):
    filename: str
    transcript: str

# ---------- Summaries ----------
class SummaryCreate(BaseModel):
    transcript: str
    summary: str
    result: Optional[WebhookResult] = None
    structured: Optional[bool] = None          # echo of SummarizeOut.structured

class SummaryOut(BaseModel):
    id: int
    user_id: int
    transcript: str
    summary: str
    timestamp: datetime

    @field_serializer("timestamp")
    def _ser_timestamp(self, v: datetime) -> str:
        return to_iso_z(v)

    class Config:
        from_attributes = True

# ---------- Reminders ----------
class ReminderCreate(BaseModel):
    text: str = ""
    date: Optional[calendar_date] = None
    time: Optional[str] = None          # "HH:MM", optional
    summary_id: Optional[int] = None    # link to a saved summary

class ReminderOut(BaseModel):
    id: int
    user_id: int
    text: str
    remind_at: datetime
    summary_id: Optional[int] = None
    completed: bool

    @field_serializer("remind_at")
    def _ser_remind_at(self, v: datetime) -> str:
        return to_iso_z(v)

    class Config:
        from_attributes = True

class SavedSummaryOut(BaseModel):
    summary: SummaryOut
    reminders: list[ReminderOut] = Field(default_factory=list)

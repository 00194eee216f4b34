# summarizer_api/services/interpreter.py
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import ValidationError

from ..schemas import ActionItem, FollowUpReminder, ReminderCandidate, WebhookResult

logger = logging.getLogger("interpreter")

# -------------------- Canonical text layout --------------------
# The formatter and the extractor below share these; change them together.
SUMMARY_HEADER = "Summary:"
ACTION_ITEMS_HEADER = "Action Items:"
DECISIONS_HEADER = "Decisions Made:"
FOLLOW_UPS_HEADER = "Follow-up Reminders:"

def _action_line(item: ActionItem) -> str:
    return f"  - {item.task} (Assignee: {item.assignee}, Due: {item.due_date})"

def _decision_line(decision: str) -> str:
    return f"  - {decision}"

def _follow_up_line(item: FollowUpReminder) -> str:
    return f"  - {item.reminder} (Due: {item.due_date}, Context: {item.context})"

# A block runs from its header to the next blank line followed by a capitalized header, or to the end.
_ACTION_BLOCK = re.compile(re.escape(ACTION_ITEMS_HEADER) + r"\n([\s\S]*?)(?=\n\n[A-Z]|\Z)")
_FOLLOW_UP_BLOCK = re.compile(re.escape(FOLLOW_UPS_HEADER) + r"\n([\s\S]*?)(?=\n\n[A-Z]|\Z)")

# All-or-nothing per line: a missing parenthesized field means no match.
_ACTION_ITEM = re.compile(r"  - (.*) \(Assignee: (.*), Due: (.*)\)")
_FOLLOW_UP_ITEM = re.compile(r"  - (.*) \(Due: (.*), Context: (.*)\)")

# -------------------- Response parsing --------------------
def parse_webhook_body(body: str) -> Union[WebhookResult, str]:
    """
    Structured result when the body is a JSON object carrying `summary`;
    anything else (invalid JSON, other JSON shapes) is plain summary text.
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError):
        return body

    if not isinstance(data, dict) or "summary" not in data:
        return body
    try:
        return WebhookResult.model_validate(data)
    except ValidationError as e:
        logger.info(f"[interpreter] JSON body did not match the structured shape, using text: {e.error_count()} errors")
        return body

def format_response(raw: Union[WebhookResult, str]) -> str:
    if isinstance(raw, str):
        return raw

    parts: List[str] = [SUMMARY_HEADER, raw.summary, ""]
    if raw.action_items:
        parts += [ACTION_ITEMS_HEADER] + [_action_line(a) for a in raw.action_items] + [""]
    if raw.decisions_made:
        parts += [DECISIONS_HEADER] + [_decision_line(d) for d in raw.decisions_made] + [""]
    if raw.follow_up_reminders:
        parts += [FOLLOW_UPS_HEADER] + [_follow_up_line(f) for f in raw.follow_up_reminders] + [""]
    return "\n".join(parts).rstrip()

@dataclass
class Interpretation:
    summary: str
    result: Optional[WebhookResult] = None

    @property
    def structured(self) -> bool:
        return self.result is not None

    def candidates(self, summary_id: Optional[int]) -> List[ReminderCandidate]:
        # plain-text answers never yield reminders
        if self.result is None:
            return []
        # result no longer describes the text (edited, or mismatched): the text wins
        if format_response(self.result) != self.summary:
            return extract_reminder_candidates(self.summary, summary_id)
        return reminders_from_result(self.result, summary_id)

def interpret_response(body: str) -> Interpretation:
    raw = parse_webhook_body(body)
    if isinstance(raw, str):
        return Interpretation(summary=raw)
    return Interpretation(summary=format_response(raw), result=raw)

# -------------------- Due dates --------------------
_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
)
_MONTHS = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)

def _month_names_to_numbers(value: str) -> str:
    # strptime's %B/%b follow the process locale; numbers do not
    def repl(m: re.Match) -> str:
        word = m.group(0).lower()
        for i, name in enumerate(_MONTHS, start=1):
            if name == word or (len(word) >= 3 and name.startswith(word.rstrip("."))):
                return f"M{i:02d}"
        return m.group(0)
    return re.sub(r"[A-Za-z]+\.?", repl, value)

_NUMERIC_MONTH_FORMATS = tuple(
    f.replace("%B", "M%m").replace("%b", "M%m") for f in _DATE_FORMATS
)

def parse_due_date(value: Optional[str]) -> Optional[datetime]:
    """
    Locale-independent due-date parsing. Returns an aware UTC datetime, or None.
    Date-only values resolve to midnight UTC; naive datetimes are taken as UTC.
    """
    s = (value or "").strip()
    if not s:
        return None

    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        dt = None

    if dt is None:
        normalized = _month_names_to_numbers(s)
        for fmt in _NUMERIC_MONTH_FORMATS:
            try:
                dt = datetime.strptime(normalized, fmt)
                break
            except ValueError:
                continue

    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # offset pushes it past year 1 / 9999
        return None

# -------------------- Reminder derivation --------------------
def _action_candidate(task: str, assignee: str, due: str, summary_id: Optional[int]) -> Optional[ReminderCandidate]:
    remind_at = parse_due_date(due)
    if remind_at is None:
        return None
    return ReminderCandidate(
        text=f"Action: {task} (Assigned to: {assignee})",
        remind_at=remind_at,
        summary_id=summary_id,
    )

def _follow_up_candidate(reminder: str, due: str, context: str, summary_id: Optional[int]) -> Optional[ReminderCandidate]:
    remind_at = parse_due_date(due)
    if remind_at is None:
        return None
    return ReminderCandidate(
        text=f"Follow-up: {reminder} (Context: {context})",
        remind_at=remind_at,
        summary_id=summary_id,
    )

def extract_reminder_candidates(canonical_text: str, summary_id: Optional[int]) -> List[ReminderCandidate]:
    """
    Re-parse canonical summary text: action items first, then follow-ups,
    each in source order. Lines whose due date does not parse are dropped.
    """
    out: List[ReminderCandidate] = []
    text = canonical_text or ""

    block = _ACTION_BLOCK.search(text)
    if block:
        for m in _ACTION_ITEM.finditer(block.group(1)):
            cand = _action_candidate(m.group(1), m.group(2), m.group(3), summary_id)
            if cand:
                out.append(cand)

    block = _FOLLOW_UP_BLOCK.search(text)
    if block:
        for m in _FOLLOW_UP_ITEM.finditer(block.group(1)):
            cand = _follow_up_candidate(m.group(1), m.group(2), m.group(3), summary_id)
            if cand:
                out.append(cand)

    return out

def reminders_from_result(result: WebhookResult, summary_id: Optional[int]) -> List[ReminderCandidate]:
    """Same candidates as extract_reminder_candidates(format_response(result)), without the text round trip."""
    out: List[ReminderCandidate] = []
    for a in result.action_items:
        cand = _action_candidate(a.task, a.assignee, a.due_date, summary_id)
        if cand:
            out.append(cand)
    for f in result.follow_up_reminders:
        cand = _follow_up_candidate(f.reminder, f.due_date, f.context, summary_id)
        if cand:
            out.append(cand)
    return out

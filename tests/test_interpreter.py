# tests/test_interpreter.py
import json
from datetime import datetime, timezone

from summarizer_api.schemas import WebhookResult
from summarizer_api.services.interpreter import (
    Interpretation,
    extract_reminder_candidates,
    format_response,
    interpret_response,
    parse_due_date,
    parse_webhook_body,
    reminders_from_result,
)

STRUCTURED = {
    "summary": "Kickoff for the Q2 launch.",
    "action_items": [
        {"task": "Ship it", "assignee": "Alice", "due_date": "2025-03-01"},
        {"task": "Write release notes", "assignee": "Bob", "due_date": "next week"},
        {"task": "Book the venue", "assignee": "Carol", "due_date": "March 14, 2025"},
    ],
    "decisions_made": ["Launch on a Tuesday", "Keep pricing flat"],
    "follow_up_reminders": [
        {"reminder": "Check analytics", "due_date": "2025-03-08", "context": "post-launch"},
        {"reminder": "Ping legal", "due_date": "", "context": "contract"},
    ],
}

EXPECTED_TEXT = """Summary:
Kickoff for the Q2 launch.

Action Items:
  - Ship it (Assignee: Alice, Due: 2025-03-01)
  - Write release notes (Assignee: Bob, Due: next week)
  - Book the venue (Assignee: Carol, Due: March 14, 2025)

Decisions Made:
  - Launch on a Tuesday
  - Keep pricing flat

Follow-up Reminders:
  - Check analytics (Due: 2025-03-08, Context: post-launch)
  - Ping legal (Due: , Context: contract)"""


def _utc(y, m, d, hh=0, mm=0):
    return datetime(y, m, d, hh, mm, tzinfo=timezone.utc)


def test_format_structured_full_layout():
    out = format_response(WebhookResult.model_validate(STRUCTURED))
    assert out == EXPECTED_TEXT


def test_format_summary_only_when_collections_empty():
    result = WebhookResult(summary="  Nothing much happened.", action_items=[], decisions_made=[])
    assert format_response(result) == "Summary:\n  Nothing much happened."


def test_format_plain_text_is_verbatim():
    raw = "Just a summary.\n\n  with trailing space  \n"
    assert format_response(raw) == raw


def test_parse_body_falls_back_to_text():
    assert parse_webhook_body("not json at all") == "not json at all"
    # valid JSON, wrong shape
    assert parse_webhook_body('["a", "b"]') == '["a", "b"]'
    assert parse_webhook_body('{"text": "hi"}') == '{"text": "hi"}'
    assert parse_webhook_body('{"summary": 42, "action_items": "oops"}') == '{"summary": 42, "action_items": "oops"}'


def test_parse_body_structured():
    parsed = parse_webhook_body(json.dumps(STRUCTURED))
    assert isinstance(parsed, WebhookResult)
    assert [a.assignee for a in parsed.action_items] == ["Alice", "Bob", "Carol"]


def test_single_action_item_candidate():
    text = "Summary:\nFoo\n\nAction Items:\n  - Ship it (Assignee: Alice, Due: 2025-03-01)\n\n"
    cands = extract_reminder_candidates(text, 1)
    assert len(cands) == 1
    assert cands[0].text == "Action: Ship it (Assigned to: Alice)"
    assert cands[0].remind_at == _utc(2025, 3, 1)
    assert cands[0].summary_id == 1
    assert cands[0].model_dump(mode="json")["remind_at"] == "2025-03-01T00:00:00.000Z"


def test_no_headers_no_candidates():
    assert extract_reminder_candidates("Summary:\nWe chatted.\n  - Ship it (Assignee: A, Due: 2025-01-01)", 1) == []
    assert extract_reminder_candidates("", 1) == []


def test_line_missing_due_field_is_skipped():
    text = (
        "Action Items:\n"
        "  - Ship it (Assignee: Alice)\n"
        "  - Test it (Assignee: Dan, Due: 2025-04-02)\n"
    )
    cands = extract_reminder_candidates(text, 7)
    assert [c.text for c in cands] == ["Action: Test it (Assigned to: Dan)"]


def test_extraction_order_actions_then_follow_ups():
    cands = extract_reminder_candidates(EXPECTED_TEXT, 3)
    assert [c.text for c in cands] == [
        "Action: Ship it (Assigned to: Alice)",
        "Action: Book the venue (Assigned to: Carol)",
        "Follow-up: Check analytics (Context: post-launch)",
    ]
    assert [c.remind_at for c in cands] == [_utc(2025, 3, 1), _utc(2025, 3, 14), _utc(2025, 3, 8)]


def test_block_stops_at_next_header():
    text = (
        "Action Items:\n"
        "  - A (Assignee: X, Due: 2025-01-01)\n"
        "\n"
        "Notes:\n"
        "  - B (Assignee: Y, Due: 2025-01-02)\n"
    )
    assert [c.text for c in extract_reminder_candidates(text, 1)] == ["Action: A (Assigned to: X)"]


def test_round_trip_matches_structured_derivation():
    result = WebhookResult.model_validate(STRUCTURED)
    from_text = extract_reminder_candidates(format_response(result), 9)
    direct = reminders_from_result(result, 9)
    assert from_text == direct
    # one per valid-dated action item, none for "next week"
    assert sum(c.text.startswith("Action:") for c in direct) == 2


def test_plain_text_interpretation_yields_nothing():
    body = "Action Items:\n  - Ship it (Assignee: Alice, Due: 2025-03-01)\n"
    interp = interpret_response(body)
    assert not interp.structured
    assert interp.summary == body
    assert interp.candidates(1) == []


def test_structured_interpretation():
    interp = interpret_response(json.dumps(STRUCTURED))
    assert interp.structured
    assert interp.summary == EXPECTED_TEXT
    assert len(interp.candidates(2)) == 3


def test_parse_due_date_formats():
    assert parse_due_date("2025-03-01") == _utc(2025, 3, 1)
    assert parse_due_date("2025-03-01T09:30:00Z") == _utc(2025, 3, 1, 9, 30)
    assert parse_due_date("2025-03-01T11:30:00+02:00") == _utc(2025, 3, 1, 9, 30)
    assert parse_due_date("2025/03/01") == _utc(2025, 3, 1)
    assert parse_due_date("03/01/2025") == _utc(2025, 3, 1)
    assert parse_due_date("March 1, 2025") == _utc(2025, 3, 1)
    assert parse_due_date("Mar 1 2025") == _utc(2025, 3, 1)
    assert parse_due_date("1 march 2025") == _utc(2025, 3, 1)


def test_parse_due_date_rejects_garbage():
    for value in (
        "", None, "TBD", "next week", "2025-13-45", "someday in May",
        # offsets that push past the ends of the calendar
        "0001-01-01T00:00:00+05:00", "9999-12-31T23:00:00-05:00",
    ):
        assert parse_due_date(value) is None


def test_out_of_range_due_date_drops_only_that_line():
    text = (
        "Action Items:\n"
        "  - Far future (Assignee: Zed, Due: 9999-12-31T23:00:00-05:00)\n"
        "  - Ship it (Assignee: Alice, Due: 2025-03-01)\n"
    )
    assert [c.text for c in extract_reminder_candidates(text, 1)] == ["Action: Ship it (Assigned to: Alice)"]


def test_result_that_no_longer_matches_text_defers_to_text():
    result = WebhookResult.model_validate(STRUCTURED)
    edited = "Summary:\nKickoff for the Q2 launch."
    assert Interpretation(summary=edited, result=result).candidates(4) == []

    assert Interpretation(summary=EXPECTED_TEXT, result=result).candidates(4) == reminders_from_result(result, 4)

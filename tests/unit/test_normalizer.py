import pytest

from crm_tools.models.domain.engagement_domain import EngagementKind, EngagementRecord
from crm_tools.services.engagements.normalizer import normalize, properties_for


def test_call_fields_map_to_uniform_record():
    raw = {
        "id": "11",
        "properties": {
            "hs_call_title": "Discovery call",
            "hs_call_body": "Talked pricing",
            "hs_call_status": "COMPLETED",
            "hs_call_direction": "OUTBOUND",
            "hs_createdate": "2024-03-01T10:00:00.000Z",
        },
    }

    record = normalize(EngagementKind.CALLS, raw)

    assert record == EngagementRecord(
        id="11",
        created_at="2024-03-01T10:00:00.000Z",
        subject="Discovery call",
        body="Talked pricing",
        status="COMPLETED",
        direction="OUTBOUND",
    )


def test_email_uses_text_as_body():
    raw = {
        "id": "21",
        "properties": {
            "hs_email_subject": "Proposal",
            "hs_email_text": "See attached",
            "hs_email_status": "SENT",
            "hs_email_direction": "EMAIL",
        },
    }

    record = normalize(EngagementKind.EMAILS, raw)

    assert record.subject == "Proposal"
    assert record.body == "See attached"
    assert record.status == "SENT"
    assert record.direction == "EMAIL"


def test_note_has_body_but_never_subject():
    raw = {
        "id": "31",
        "properties": {"hs_note_body": "Call back Friday", "hs_call_title": "ignored"},
    }

    record = normalize(EngagementKind.NOTES, raw)

    assert record.body == "Call back Friday"
    assert record.subject is None
    assert record.status is None
    assert record.direction is None


def test_meeting_outcome_becomes_status():
    raw = {"id": "51", "properties": {"hs_meeting_title": "Demo", "hs_meeting_outcome": "SCHEDULED"}}

    record = normalize(EngagementKind.MEETINGS, raw)

    assert record.subject == "Demo"
    assert record.status == "SCHEDULED"
    assert record.direction is None


def test_task_has_no_direction():
    raw = {
        "id": "41",
        "properties": {
            "hs_task_subject": "Send contract",
            "hs_task_status": "NOT_STARTED",
            "hs_call_direction": "INBOUND",
        },
    }

    record = normalize(EngagementKind.TASKS, raw)

    assert record.subject == "Send contract"
    assert record.status == "NOT_STARTED"
    assert record.direction is None


@pytest.mark.parametrize("kind", list(EngagementKind))
def test_only_created_at_leaves_everything_else_unset(kind):
    raw = {"id": "1", "properties": {"hs_createdate": "2024-01-01T00:00:00Z"}}

    record = normalize(kind, raw)

    assert record.id == "1"
    assert record.created_at == "2024-01-01T00:00:00Z"
    assert record.subject is None
    assert record.body is None
    assert record.status is None
    assert record.direction is None


def test_malformed_record_never_fails():
    assert normalize(EngagementKind.CALLS, {}) == EngagementRecord(id="")
    assert normalize(EngagementKind.CALLS, {"id": 7, "properties": None}).id == "7"


def test_requested_properties_cover_the_record_exactly():
    assert properties_for(EngagementKind.CALLS) == [
        "hs_call_title",
        "hs_call_body",
        "hs_call_status",
        "hs_call_direction",
        "hs_createdate",
    ]
    assert properties_for(EngagementKind.NOTES) == ["hs_note_body", "hs_createdate"]
    assert properties_for(EngagementKind.MEETINGS) == [
        "hs_meeting_title",
        "hs_meeting_body",
        "hs_meeting_outcome",
        "hs_createdate",
    ]

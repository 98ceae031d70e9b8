"""
Engagement record normalization.

Each engagement kind stores the same concepts under different HubSpot property
names (a call's title is ``hs_call_title``, an email's is ``hs_email_subject``).
ENGAGEMENT_PROPERTIES maps every kind onto the uniform EngagementRecord shape
so the aggregator never branches on kind.
"""

from dataclasses import dataclass
from typing import Any

from crm_tools.models.domain.engagement_domain import EngagementKind, EngagementRecord

CREATED_AT_PROPERTY = "hs_createdate"


@dataclass(frozen=True, slots=True)
class EngagementFieldMap:
    """HubSpot property names backing each EngagementRecord attribute."""

    subject: str | None = None
    body: str | None = None
    status: str | None = None
    direction: str | None = None

    def properties(self) -> list[str]:
        """Exact property list requested from the detail endpoint."""
        names = [self.subject, self.body, self.status, self.direction]
        return [name for name in names if name] + [CREATED_AT_PROPERTY]


ENGAGEMENT_PROPERTIES: dict[EngagementKind, EngagementFieldMap] = {
    EngagementKind.CALLS: EngagementFieldMap(
        subject="hs_call_title",
        body="hs_call_body",
        status="hs_call_status",
        direction="hs_call_direction",
    ),
    EngagementKind.EMAILS: EngagementFieldMap(
        subject="hs_email_subject",
        body="hs_email_text",
        status="hs_email_status",
        direction="hs_email_direction",
    ),
    EngagementKind.NOTES: EngagementFieldMap(body="hs_note_body"),
    EngagementKind.TASKS: EngagementFieldMap(
        subject="hs_task_subject",
        body="hs_task_body",
        status="hs_task_status",
    ),
    EngagementKind.MEETINGS: EngagementFieldMap(
        subject="hs_meeting_title",
        body="hs_meeting_body",
        status="hs_meeting_outcome",
    ),
}


def properties_for(kind: EngagementKind) -> list[str]:
    return ENGAGEMENT_PROPERTIES[kind].properties()


def _text(properties: dict[str, Any], name: str | None) -> str | None:
    if not name:
        return None
    value = properties.get(name)
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def normalize(kind: EngagementKind, raw: dict[str, Any]) -> EngagementRecord:
    """
    Map a raw HubSpot object ({"id": ..., "properties": {...}}) to an EngagementRecord.

    Never raises: absent fields stay None and a missing id becomes "".
    """
    raw = raw if isinstance(raw, dict) else {}
    properties = raw.get("properties")
    if not isinstance(properties, dict):
        properties = {}

    field_map = ENGAGEMENT_PROPERTIES[kind]
    record_id = raw.get("id")

    return EngagementRecord(
        id=str(record_id) if record_id is not None else "",
        created_at=_text(properties, CREATED_AT_PROPERTY),
        subject=_text(properties, field_map.subject),
        body=_text(properties, field_map.body),
        status=_text(properties, field_map.status),
        direction=_text(properties, field_map.direction),
    )

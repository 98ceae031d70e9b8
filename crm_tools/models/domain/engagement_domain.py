# crm_tools/models/domain/engagement_domain.py
"""
Engagement Domain Models
Value objects produced by the activity aggregation pipeline.
Serialized with HubSpot-style camelCase keys for tool responses.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class EngagementKind(str, Enum):
    """CRM activity types associated with a contact, in processing order."""

    CALLS = "calls"
    EMAILS = "emails"
    NOTES = "notes"
    TASKS = "tasks"
    MEETINGS = "meetings"


# Fixed processing order; also the tie-break order when timestamps are equal.
ENGAGEMENT_KINDS: tuple[EngagementKind, ...] = tuple(EngagementKind)

_OLDEST = datetime.min.replace(tzinfo=UTC)


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse a HubSpot timestamp.

    Accepts ISO 8601 strings (with a trailing Z) and epoch milliseconds.
    Returns None for anything else.
    """
    if not value:
        return None
    value = value.strip()
    if value.isdigit():
        try:
            return datetime.fromtimestamp(int(value) / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


@dataclass(frozen=True, slots=True)
class EngagementRecord:
    """One normalized engagement (call, email, note, task or meeting)."""

    id: str
    created_at: str | None = None
    subject: str | None = None
    body: str | None = None
    status: str | None = None
    direction: str | None = None

    def created_at_datetime(self) -> datetime | None:
        return parse_timestamp(self.created_at)

    def sort_key(self) -> datetime:
        """Timestamp used for recency ordering; unparseable sorts as oldest."""
        return self.created_at_datetime() or _OLDEST

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "createdAt": self.created_at,
            "subject": self.subject,
            "body": self.body,
            "status": self.status,
            "direction": self.direction,
        }
        return {key: value for key, value in data.items() if value is not None}


@dataclass(slots=True)
class EngagementSummary:
    """Per-kind result: the true association count plus a bounded sample."""

    kind: EngagementKind
    count: int = 0
    items: list[EngagementRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.kind.value,
            "count": self.count,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True, slots=True)
class TimelineEntry:
    """An engagement tagged with its kind, as it appears in the merged timeline."""

    kind: EngagementKind
    record: EngagementRecord

    def to_dict(self) -> dict:
        return {"type": self.kind.value, **self.record.to_dict()}


NO_RECENT_ACTIVITY = "No recent activity found"


@dataclass(slots=True)
class ActivitySummary:
    """Aggregate of all five engagement kinds for one contact."""

    engagements: dict[EngagementKind, EngagementSummary]
    timeline: list[TimelineEntry] = field(default_factory=list)
    timed_out_kinds: list[EngagementKind] = field(default_factory=list)

    def __getitem__(self, kind: EngagementKind) -> EngagementSummary:
        return self.engagements[kind]

    @property
    def total_engagements(self) -> int:
        return sum(summary.count for summary in self.engagements.values())

    @property
    def most_recent_engagement(self) -> TimelineEntry | None:
        """Head of the merged timeline, or None when nothing was fetched."""
        return self.timeline[0] if self.timeline else None

    @property
    def recent_activity(self) -> str:
        entry = self.most_recent_engagement
        if entry is None:
            return NO_RECENT_ACTIVITY
        return f"Most recent: {entry.kind.value} on {entry.record.created_at or 'unknown date'}"

    def to_dict(self) -> dict:
        data = {kind.value: self.engagements[kind].to_dict() for kind in ENGAGEMENT_KINDS}
        most_recent = self.most_recent_engagement
        data.update(
            {
                "totalEngagements": self.total_engagements,
                "recentActivity": self.recent_activity,
                "mostRecentEngagement": most_recent.to_dict() if most_recent else None,
            }
        )
        if self.timed_out_kinds:
            data["timedOutKinds"] = [kind.value for kind in self.timed_out_kinds]
        return data


@dataclass(frozen=True, slots=True)
class ContactRef:
    """A resolved HubSpot contact."""

    id: str
    firstname: str | None = None
    lastname: str | None = None
    email: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "ContactRef":
        properties = data.get("properties") or {}
        return cls(
            id=str(data.get("id") or ""),
            firstname=properties.get("firstname"),
            lastname=properties.get("lastname"),
            email=properties.get("email"),
        )

    @property
    def display_name(self) -> str:
        name = " ".join(part for part in (self.firstname, self.lastname) if part)
        return name or "Unknown"


@dataclass(slots=True)
class ActivityReport:
    """Result of summarizing one contact: who it is plus what happened."""

    contact: ContactRef
    summary: ActivitySummary

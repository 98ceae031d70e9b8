"""
Markdown rendering of an ActivitySummary for the agent.
"""

from crm_tools.models.domain.engagement_domain import (
    ActivitySummary,
    EngagementKind,
    EngagementRecord,
)

NOTE_PREVIEW_LENGTH = 100
MAX_LISTED_ITEMS = 3
MAX_LISTED_NOTES = 2


def _dated_line(fallback: str):
    def render(record: EngagementRecord) -> str:
        return f"- {record.subject or fallback} ({record.created_at or 'unknown date'})"

    return render


def _task_line(record: EngagementRecord) -> str:
    return f"- {record.subject or 'Task'} - {record.status or 'unknown status'}"


def _note_line(record: EngagementRecord) -> str:
    body = record.body or ""
    preview = body[:NOTE_PREVIEW_LENGTH] or "No content"
    suffix = "..." if len(body) > NOTE_PREVIEW_LENGTH else ""
    return f"- {preview}{suffix}"


# (kind, heading, items listed, line renderer) in display order
_SECTIONS = (
    (EngagementKind.CALLS, "Calls", MAX_LISTED_ITEMS, _dated_line("Call")),
    (EngagementKind.EMAILS, "Emails", MAX_LISTED_ITEMS, _dated_line("Email")),
    (EngagementKind.MEETINGS, "Meetings", MAX_LISTED_ITEMS, _dated_line("Meeting")),
    (EngagementKind.TASKS, "Tasks", MAX_LISTED_ITEMS, _task_line),
    (EngagementKind.NOTES, "Notes", MAX_LISTED_NOTES, _note_line),
)


def render_activity_summary(
    summary: ActivitySummary, contact_name: str | None, email: str | None
) -> str:
    """Render the summary as a short markdown report. Kinds with no activity are omitted."""
    lines = [
        f"## Activity Summary for {contact_name or 'Unknown'} ({email or 'no email'})",
        "",
        f"**Total Engagements:** {summary.total_engagements}",
        f"**{summary.recent_activity}**",
        "",
    ]

    for kind, heading, limit, render_line in _SECTIONS:
        section = summary[kind]
        if section.count <= 0:
            continue
        lines.append(f"### {heading} ({section.count} total)")
        lines.extend(render_line(record) for record in section.items[:limit])
        if kind is not EngagementKind.NOTES:
            lines.append("")

    return "\n".join(lines)

"""
Contact activity aggregation.

Builds an ActivitySummary for one contact: the true association count for each
engagement kind, a bounded sample of detailed records per kind, and a merged
timeline sorted newest first.
"""

import asyncio

from crm_tools.config import settings
from crm_tools.infrastructure.observability.logging import get_logger
from crm_tools.models.domain.engagement_domain import (
    ENGAGEMENT_KINDS,
    ActivityReport,
    ActivitySummary,
    EngagementKind,
    EngagementSummary,
    TimelineEntry,
)
from crm_tools.services.contacts_service import ContactService
from crm_tools.services.engagements.fetchers import fetch_associations, fetch_engagement
from crm_tools.services.engagements.normalizer import normalize
from crm_tools.services.hubspot.client import HubSpotClient, InvalidInputError

logger = get_logger(__name__)


class ActivityAggregator:
    """
    Summarizes a contact's calls, emails, notes, tasks and meetings.

    Each kind runs as its own task. Results land in kind-indexed slots and are
    merged in ENGAGEMENT_KINDS order only after every task has finished, so the
    merged timeline is identical to a sequential run.
    """

    def __init__(
        self,
        client: HubSpotClient,
        sample_cap: int | None = None,
        timeout: float | None = None,
    ):
        self.client = client
        self.contacts = ContactService(client)
        self.sample_cap = sample_cap if sample_cap is not None else settings.ACTIVITY_SAMPLE_CAP
        if timeout is None:
            timeout = settings.ACTIVITY_SUMMARY_TIMEOUT
        self.timeout = timeout if timeout and timeout > 0 else None

    async def summarize(self, contact_id: str) -> ActivityReport:
        """
        Summarize all engagement activity for a contact.

        Raises:
            InvalidInputError: If contact_id is empty
            MissingCredentialError: If no HubSpot token is configured
            HubSpotNotFoundError: If the contact does not exist
            HubSpotAPIError: If the contact lookup fails
        """
        if not contact_id:
            raise InvalidInputError("Contact ID is required.")
        self.client.ensure_token()

        contact = await self.contacts.get_contact(contact_id)
        logger.info("Summarizing contact activity", contact_id=contact_id)

        summary = await self.summarize_engagements(contact_id)

        logger.info(
            "Contact activity summarized",
            contact_id=contact_id,
            total_engagements=summary.total_engagements,
            sampled_items=len(summary.timeline),
            timed_out_kinds=[kind.value for kind in summary.timed_out_kinds],
        )
        return ActivityReport(contact=contact, summary=summary)

    async def summarize_engagements(self, contact_id: str) -> ActivitySummary:
        tasks = {
            kind: asyncio.create_task(self._summarize_kind(contact_id, kind))
            for kind in ENGAGEMENT_KINDS
        }
        try:
            done, pending = await asyncio.wait(tasks.values(), timeout=self.timeout)
        finally:
            for task in tasks.values():
                if not task.done():
                    task.cancel()

        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.warning(
                "Activity summary timed out, returning partial results",
                contact_id=contact_id,
                timeout_seconds=self.timeout,
                pending_kinds=[kind.value for kind, task in tasks.items() if task in pending],
            )

        engagements: dict[EngagementKind, EngagementSummary] = {}
        timed_out: list[EngagementKind] = []
        for kind, task in tasks.items():
            if task in done:
                engagements[kind] = task.result()
            else:
                engagements[kind] = EngagementSummary(kind=kind)
                timed_out.append(kind)

        return ActivitySummary(
            engagements=engagements,
            timeline=merge_timeline(engagements),
            timed_out_kinds=timed_out,
        )

    async def _summarize_kind(self, contact_id: str, kind: EngagementKind) -> EngagementSummary:
        associations = await fetch_associations(self.client, contact_id, kind)
        # A failed association fetch degrades this kind to count=0 instead of
        # failing the whole summary; the error was already logged by the fetcher.
        summary = EngagementSummary(kind=kind, count=len(associations.ids))

        for engagement_id in associations.ids[: self.sample_cap]:
            detail = await fetch_engagement(self.client, kind, engagement_id)
            if not detail.found:
                continue
            summary.items.append(normalize(kind, detail.record))

        return summary


def merge_timeline(engagements: dict[EngagementKind, EngagementSummary]) -> list[TimelineEntry]:
    """
    Merge every sampled item into one list, newest first.

    Items without a parseable createdAt sort last. The sort is stable, so equal
    timestamps keep kind order (calls, emails, notes, tasks, meetings).
    """
    entries = [
        TimelineEntry(kind=kind, record=record)
        for kind in ENGAGEMENT_KINDS
        if kind in engagements
        for record in engagements[kind].items
    ]
    return sorted(entries, key=lambda entry: entry.record.sort_key(), reverse=True)

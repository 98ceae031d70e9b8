"""
Association and detail fetchers for contact engagements.

Both fetchers are fail-soft: they never raise. Failures come back as a result
object carrying the error so the caller decides what to do with it.
"""

from dataclasses import dataclass, field
from typing import Any

from crm_tools.infrastructure.observability.logging import get_logger
from crm_tools.models.domain.engagement_domain import EngagementKind
from crm_tools.services.engagements.normalizer import properties_for
from crm_tools.services.hubspot.client import HubSpotClient, HubSpotError

logger = get_logger(__name__)


@dataclass(slots=True)
class AssociationResult:
    ids: list[str] = field(default_factory=list)
    error: HubSpotError | None = None


@dataclass(slots=True)
class DetailResult:
    record: dict[str, Any] | None = None
    error: HubSpotError | None = None

    @property
    def found(self) -> bool:
        return self.record is not None


async def fetch_associations(
    client: HubSpotClient, contact_id: str, kind: EngagementKind
) -> AssociationResult:
    """
    List the ids of engagements of one kind associated with a contact.

    Ids keep the order HubSpot reports them in.
    """
    path = f"/crm/v4/objects/contacts/{contact_id}/associations/{kind.value}"
    try:
        data = await client.get(path, operation=f"list {kind.value} associations")
    except HubSpotError as e:
        logger.warning(
            "Association fetch failed",
            contact_id=contact_id,
            kind=kind.value,
            error=str(e),
            status_code=e.status_code,
        )
        return AssociationResult(error=e)

    ids = []
    for association in data.get("results") or []:
        to_object_id = association.get("toObjectId") if isinstance(association, dict) else None
        if to_object_id:
            ids.append(str(to_object_id))
    return AssociationResult(ids=ids)


async def fetch_engagement(
    client: HubSpotClient, kind: EngagementKind, engagement_id: str
) -> DetailResult:
    """Fetch one engagement with only the properties its kind needs."""
    path = f"/crm/v3/objects/{kind.value}/{engagement_id}"
    params = {"properties": ",".join(properties_for(kind))}
    try:
        data = await client.get(path, params=params, operation=f"get {kind.value} details")
    except HubSpotError as e:
        logger.debug(
            "Engagement detail fetch failed",
            kind=kind.value,
            engagement_id=engagement_id,
            error=str(e),
            status_code=e.status_code,
        )
        return DetailResult(error=e)

    return DetailResult(record=data)

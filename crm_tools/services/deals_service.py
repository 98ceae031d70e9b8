"""
Deal service for HubSpot deal operations.
Deal lookup, stage updates and pipeline listing.
"""

from typing import Any

from crm_tools.infrastructure.observability.logging import get_logger
from crm_tools.services.hubspot.client import HubSpotClient, InvalidInputError

logger = get_logger(__name__)

DEALS_PATH = "/crm/v3/objects/deals"
DEAL_PIPELINES_PATH = "/crm/v3/pipelines/deals"

DEAL_PROPERTIES = ("dealname", "dealstage", "amount", "closedate", "pipeline")


class DealService:
    """HubSpot deal operations on top of a HubSpotClient."""

    def __init__(self, client: HubSpotClient):
        self.client = client

    async def get_deal(self, deal_id: str) -> dict[str, Any]:
        """Fetch a deal with its name, stage, amount, close date and pipeline."""
        self.client.ensure_token()
        if not deal_id:
            raise InvalidInputError("Deal ID is required.")

        return await self.client.get(
            f"{DEALS_PATH}/{deal_id}",
            params={"properties": ",".join(DEAL_PROPERTIES)},
            operation="get_deal",
        )

    async def update_deal_stage(
        self, deal_id: str, dealstage: str, notes: str | None = None
    ) -> dict[str, Any]:
        """
        Move a deal to another pipeline stage.

        Args:
            deal_id: HubSpot deal id
            dealstage: Target stage id, e.g. "closedwon" or a numeric id
            notes: Free-text reason; logged only, HubSpot does not store it here

        Returns:
            dict: {"id": ..., "properties": {...}} after the update
        """
        self.client.ensure_token()
        if not deal_id:
            raise InvalidInputError("Deal ID is required.")
        if not dealstage:
            raise InvalidInputError("Deal stage is required.")

        logger.info(
            "Updating deal stage",
            deal_id=deal_id,
            dealstage=dealstage,
            has_notes=bool(notes),
        )
        data = await self.client.patch(
            f"{DEALS_PATH}/{deal_id}",
            {"properties": {"dealstage": dealstage}},
            operation="update_deal_stage",
        )
        return {"id": data.get("id"), "properties": data.get("properties") or {}}

    async def get_deal_pipelines(self) -> list[dict[str, Any]]:
        """List deal pipelines with their stages, as returned by HubSpot."""
        self.client.ensure_token()
        data = await self.client.get(DEAL_PIPELINES_PATH, operation="get_deal_pipelines")
        pipelines = data.get("results") or []
        logger.info("Deal pipelines listed", pipeline_count=len(pipelines))
        return pipelines

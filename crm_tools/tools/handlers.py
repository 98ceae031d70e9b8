"""
Tool handlers.

Each handler receives a HubSpotClient and its validated input model and returns
a result envelope. HubSpot errors not handled here are converted to envelopes
by the registry.
"""

from typing import Any

from crm_tools.infrastructure.observability.logging import get_logger
from crm_tools.models.api.tool_requests import (
    CreateContactFromChatInput,
    CreateContactInput,
    GetContactActivitySummaryInput,
    GetDealPipelinesInput,
    UpdateContactInput,
    UpdateDealStageInput,
)
from crm_tools.services.contacts_service import ContactService
from crm_tools.services.deals_service import DealService
from crm_tools.services.engagements.aggregator import ActivityAggregator
from crm_tools.services.engagements.renderer import render_activity_summary
from crm_tools.services.hubspot.client import (
    HubSpotAPIError,
    HubSpotClient,
    HubSpotNotFoundError,
)
from crm_tools.tools.envelope import failure, success

logger = get_logger(__name__)


async def create_contact(client: HubSpotClient, data: CreateContactInput) -> dict[str, Any]:
    result = await ContactService(client).create_contact(data.properties())
    return success(**result)


async def create_contact_from_chat(
    client: HubSpotClient, data: CreateContactFromChatInput
) -> dict[str, Any]:
    result = await ContactService(client).create_contact_from_chat(
        email=data.email,
        firstname=data.firstname,
        lastname=data.lastname,
        phone=data.phone,
        company=data.company,
        chat_summary=data.chat_summary,
    )
    return success(**result)


async def update_contact(client: HubSpotClient, data: UpdateContactInput) -> dict[str, Any]:
    result = await ContactService(client).update_contact(data.contact_id, data.properties())
    return success(**result)


async def update_deal_stage(client: HubSpotClient, data: UpdateDealStageInput) -> dict[str, Any]:
    deals = DealService(client)
    client.ensure_token()

    try:
        previous_deal = await deals.get_deal(data.deal_id)
    except HubSpotAPIError as e:
        return failure(f"Could not find deal with ID {data.deal_id}: {e}")

    result = await deals.update_deal_stage(data.deal_id, data.dealstage, data.notes)
    return success(
        **result,
        message=f"Successfully updated deal stage to '{data.dealstage}'",
        previousDeal=previous_deal,
    )


async def get_deal_pipelines(client: HubSpotClient, data: GetDealPipelinesInput) -> dict[str, Any]:
    pipelines = await DealService(client).get_deal_pipelines()
    return success(pipelines=pipelines)


async def get_contact_activity_summary(
    client: HubSpotClient, data: GetContactActivitySummaryInput
) -> dict[str, Any]:
    client.ensure_token()
    contact_id = data.contact_id

    if not contact_id and data.email:
        try:
            match = await ContactService(client).search_contact_by_email(data.email)
        except HubSpotAPIError as e:
            return failure(f"Failed to search for contact: {e}")
        if not match or not match.get("id"):
            return failure(f"No contact found with email {data.email}")
        contact_id = str(match["id"])

    if not contact_id:
        return failure("Either contactId or email must be provided")

    try:
        report = await ActivityAggregator(client).summarize(contact_id)
    except HubSpotNotFoundError as e:
        return failure(e.response_data.get("message") or "Contact not found", status=e.status_code)

    contact = report.contact
    return success(
        contactId=contact.id or contact_id,
        contactName=contact.display_name,
        email=contact.email,
        summary=report.summary.to_dict(),
        summaryText=render_activity_summary(report.summary, contact.display_name, contact.email),
    )

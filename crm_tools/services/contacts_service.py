"""
Contact service for HubSpot contact operations.
Create, update, look up by id or email, and duplicate-checked creation from chat.
"""

from typing import Any

from crm_tools.infrastructure.observability.logging import get_logger
from crm_tools.models.domain.engagement_domain import ContactRef
from crm_tools.services.hubspot.client import (
    HubSpotAPIError,
    HubSpotClient,
    InvalidInputError,
)

logger = get_logger(__name__)

CONTACTS_PATH = "/crm/v3/objects/contacts"

CONTACT_PROPERTIES = ("email", "firstname", "lastname", "phone", "company")
IDENTITY_PROPERTIES = ("email", "firstname", "lastname")


def build_contact_properties(values: dict[str, Any]) -> dict[str, str]:
    """Keep only the writable contact properties that have a non-empty value."""
    return {name: values[name] for name in CONTACT_PROPERTIES if values.get(name)}


def _object_result(data: dict) -> dict[str, Any]:
    return {"id": data.get("id"), "properties": data.get("properties") or {}}


class ContactService:
    """HubSpot contact operations on top of a HubSpotClient."""

    def __init__(self, client: HubSpotClient):
        self.client = client

    async def create_contact(self, values: dict[str, Any]) -> dict[str, Any]:
        """
        Create a contact.

        Returns:
            dict: {"id": ..., "properties": {...}} as stored by HubSpot

        Raises:
            InvalidInputError: If no property has a value
            HubSpotError: If the remote call fails
        """
        self.client.ensure_token()
        properties = build_contact_properties(values)
        if not properties:
            raise InvalidInputError("No properties provided.")

        logger.info("Creating contact", properties=sorted(properties))
        data = await self.client.post(
            CONTACTS_PATH, {"properties": properties}, operation="create_contact"
        )
        logger.info("Contact created", contact_id=data.get("id"))
        return _object_result(data)

    async def update_contact(self, contact_id: str, values: dict[str, Any]) -> dict[str, Any]:
        """Patch the given properties onto an existing contact."""
        self.client.ensure_token()
        if not contact_id:
            raise InvalidInputError("Contact ID is required.")

        properties = build_contact_properties(values)
        if not properties:
            raise InvalidInputError("No properties to update provided.")

        logger.info("Updating contact", contact_id=contact_id, properties=sorted(properties))
        data = await self.client.patch(
            f"{CONTACTS_PATH}/{contact_id}",
            {"properties": properties},
            operation="update_contact",
        )
        return _object_result(data)

    async def get_contact(self, contact_id: str) -> ContactRef:
        """Fetch a contact's identity fields; HubSpotNotFoundError if it does not exist."""
        self.client.ensure_token()
        if not contact_id:
            raise InvalidInputError("Contact ID is required.")

        data = await self.client.get(
            f"{CONTACTS_PATH}/{contact_id}",
            params={"properties": ",".join(IDENTITY_PROPERTIES)},
            operation="get_contact",
        )
        return ContactRef.from_api(data)

    async def search_contact_by_email(self, email: str) -> dict[str, Any] | None:
        """
        Find a contact whose email equals ``email``.

        Returns:
            The first matching HubSpot object ({"id", "properties", ...}) or None
        """
        self.client.ensure_token()
        payload = {
            "filterGroups": [
                {"filters": [{"propertyName": "email", "operator": "EQ", "value": email}]}
            ],
            "properties": list(CONTACT_PROPERTIES),
        }
        data = await self.client.post(
            f"{CONTACTS_PATH}/search", payload, operation="search_contact_by_email"
        )
        results = data.get("results") or []
        if not results:
            logger.debug("No contact matched email search")
            return None
        return results[0]

    async def create_contact_from_chat(
        self,
        email: str,
        firstname: str | None = None,
        lastname: str | None = None,
        phone: str | None = None,
        company: str | None = None,
        chat_summary: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a contact from chat details unless one with the same email exists.

        A failed duplicate search does not block creation.
        """
        self.client.ensure_token()
        if not email:
            raise InvalidInputError("Email is required.")

        try:
            existing = await self.search_contact_by_email(email)
        except HubSpotAPIError as e:
            logger.warning("Duplicate check failed, creating contact anyway", error=str(e))
            existing = None

        if existing and existing.get("id"):
            logger.info("Contact already exists", contact_id=existing.get("id"))
            return {
                "alreadyExists": True,
                "contactId": existing.get("id"),
                "message": f"Contact with email {email} already exists in HubSpot",
                "contact": existing,
            }

        created = await self.create_contact(
            {
                "email": email,
                "firstname": firstname,
                "lastname": lastname,
                "phone": phone,
                "company": company,
            }
        )
        result = {
            **created,
            "alreadyExists": False,
            "message": f"Successfully created new contact from chat: {email}",
        }
        if chat_summary is not None:
            result["chatSummary"] = chat_summary
        return result

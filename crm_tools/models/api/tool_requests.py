# crm_tools/models/api/tool_requests.py
"""
Tool input models.
Validated before any HubSpot call; field aliases match the camelCase names
the agent runtime sends.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def validate_email(value: str | None) -> str | None:
    if value is None:
        return value
    if not EMAIL_PATTERN.match(value):
        raise ValueError("value is not a valid email address")
    return value


class ToolInput(BaseModel):
    """Base for tool inputs: accepts aliases or field names, ignores unknown keys."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ContactPropertiesInput(ToolInput):
    email: str | None = Field(
        default=None,
        description="Contact's email address (recommended for unique identification)",
    )
    firstname: str | None = Field(default=None, description="Contact's first name")
    lastname: str | None = Field(default=None, description="Contact's last name")
    phone: str | None = Field(default=None, description="Contact's phone number")
    company: str | None = Field(
        default=None, description="Company name the contact is associated with"
    )

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str | None) -> str | None:
        return validate_email(value)

    def properties(self) -> dict[str, str | None]:
        return self.model_dump(include={"email", "firstname", "lastname", "phone", "company"})


class CreateContactInput(ContactPropertiesInput):
    """Input for createContact."""


class CreateContactFromChatInput(ToolInput):
    """Input for createContactFromChat."""

    email: str = Field(..., description="Email address extracted from chat conversation")
    firstname: str | None = Field(default=None, description="First name mentioned in chat")
    lastname: str | None = Field(default=None, description="Last name mentioned in chat")
    phone: str | None = Field(default=None, description="Phone number if provided in chat")
    company: str | None = Field(default=None, description="Company name if mentioned in chat")
    chat_summary: str | None = Field(
        default=None,
        alias="chatSummary",
        description="Brief summary of the chat conversation for context",
    )

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str | None) -> str | None:
        return validate_email(value)


class UpdateContactInput(ContactPropertiesInput):
    """Input for updateContact."""

    contact_id: str = Field(..., alias="contactId", description="HubSpot Contact ID to update")


class UpdateDealStageInput(ToolInput):
    """Input for updateDealStage."""

    deal_id: str = Field(..., alias="dealId", description="The HubSpot Deal ID to update")
    dealstage: str = Field(
        ...,
        description=(
            "The new deal stage ID (e.g., 'qualifiedtobuy', 'closedwon', "
            "or numeric ID like '139921')"
        ),
    )
    notes: str | None = Field(
        default=None, description="Optional notes about why the stage was updated"
    )


class GetDealPipelinesInput(ToolInput):
    """getDealPipelines takes no arguments."""


class GetContactActivitySummaryInput(ToolInput):
    """Input for getContactActivitySummary; one of contactId or email is needed."""

    contact_id: str | None = Field(
        default=None, alias="contactId", description="HubSpot Contact ID to get activity for"
    )
    email: str | None = Field(
        default=None,
        description="Email address to search for contact (alternative to contactId)",
    )

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str | None) -> str | None:
        return validate_email(value)

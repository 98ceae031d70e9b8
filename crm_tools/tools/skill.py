"""
Agent-facing description of the HubSpot CRM skill.
Served alongside the tool catalog so the runtime can prime the model.
"""

SKILL_NAME = "hubspotCRM"
SKILL_DESCRIPTION = (
    "HubSpot CRM integration skill for managing contacts, deals, and activity tracking"
)

SKILL_CONTEXT = """
## HubSpot CRM Skill

This skill provides HubSpot CRM integration for managing contacts, deals, and
tracking sales/marketing activity.

### Available Tools

#### 1. createContact
Creates a new contact in HubSpot CRM.

**When to use:**
- When a user explicitly asks to add a new contact to HubSpot
- For manual contact creation with known details

**Input Requirements:**
- At least one property must be provided (email, firstname, lastname, phone, or company)
- Email is strongly recommended as it serves as a unique identifier

#### 2. createContactFromChat
Converts inbound chat conversations into HubSpot contacts. Checks for an existing
contact with the same email before creating one.

**When to use:**
- After collecting contact information during a chat conversation
- To capture leads from chat interactions

**Best Practice:**
- Gather at minimum the email address during chat
- Include a brief chat summary for context

#### 3. updateContact
Updates an existing contact's properties.

**Input Requirements:**
- Contact ID is required
- At least one property to update must be provided

#### 4. updateDealStage
Moves an existing deal to another pipeline stage after a call or meeting.

**Prerequisites:**
- The Deal ID
- The target stage ID (use getDealPipelines to find valid stage IDs)

**Common Stage IDs (default pipeline):**
- "qualifiedtobuy" - Qualified to Buy
- "presentationscheduled" - Presentation Scheduled
- "decisionmakerboughtin" - Decision Maker Bought-In
- "contractsent" - Contract Sent
- "closedwon" - Closed Won
- "closedlost" - Closed Lost

#### 5. getDealPipelines
Retrieves all deal pipelines and their stages.

**When to use:**
- Before updating a deal stage to find the correct stage ID
- When the user asks about available deal stages

#### 6. getContactActivitySummary
Summarizes a contact's recent calls, emails, notes, tasks, and meetings.
Accepts a contact ID or an email address.

**What it includes:**
- Up to 5 recent records of each engagement type
- Total engagement count across all types
- Most recent activity timestamp
- Contact details (name, email)

### Error Handling

**Common Errors:**
- "Missing HUBSPOT_PRIVATE_APP_TOKEN" - Ensure the API token is configured
- "Contact not found" - Verify the contact ID or email exists
- "Could not find deal with ID" - Check that the deal ID is correct
- Invalid deal stage - Use getDealPipelines to find valid stage IDs

### Required HubSpot Scopes
- crm.objects.contacts.read
- crm.objects.contacts.write
- crm.objects.deals.read
- crm.objects.deals.write
- crm.schemas.deals.read
""".strip()

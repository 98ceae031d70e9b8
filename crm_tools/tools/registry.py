"""
CRM tool registry.

Maps tool names to their description, input model and handler, and runs
tools behind a boundary that always returns a result envelope.
"""

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from crm_tools.infrastructure.observability.logging import get_logger, log_tool_call
from crm_tools.models.api.tool_requests import (
    CreateContactFromChatInput,
    CreateContactInput,
    GetContactActivitySummaryInput,
    GetDealPipelinesInput,
    UpdateContactInput,
    UpdateDealStageInput,
)
from crm_tools.services.hubspot.client import HubSpotClient, HubSpotError, get_hubspot_client
from crm_tools.tools import handlers
from crm_tools.tools.envelope import failure, failure_from_exception

logger = get_logger(__name__)

ToolHandler = Callable[[HubSpotClient, Any], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class CRMTool:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: ToolHandler

    def describe(self) -> dict[str, Any]:
        """Catalog entry for the agent runtime."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_model.model_json_schema(by_alias=True),
        }


TOOL_REGISTRY: dict[str, CRMTool] = {
    tool.name: tool
    for tool in (
        CRMTool(
            name="createContact",
            description="Creates a new contact in HubSpot CRM with the provided properties",
            input_model=CreateContactInput,
            handler=handlers.create_contact,
        ),
        CRMTool(
            name="createContactFromChat",
            description=(
                "Creates a HubSpot contact from information gathered during an "
                "inbound chat conversation"
            ),
            input_model=CreateContactFromChatInput,
            handler=handlers.create_contact_from_chat,
        ),
        CRMTool(
            name="updateContact",
            description="Updates an existing contact's properties in HubSpot CRM",
            input_model=UpdateContactInput,
            handler=handlers.update_contact,
        ),
        CRMTool(
            name="updateDealStage",
            description=(
                "Updates the stage of an existing deal in HubSpot CRM, typically after "
                "a sales call or meeting"
            ),
            input_model=UpdateDealStageInput,
            handler=handlers.update_deal_stage,
        ),
        CRMTool(
            name="getDealPipelines",
            description=(
                "Retrieves all deal pipelines and their stages from HubSpot to help "
                "identify valid stage IDs"
            ),
            input_model=GetDealPipelinesInput,
            handler=handlers.get_deal_pipelines,
        ),
        CRMTool(
            name="getContactActivitySummary",
            description=(
                "Summarizes a contact's recent marketing and sales activity including "
                "calls, emails, notes, tasks, and meetings"
            ),
            input_model=GetContactActivitySummaryInput,
            handler=handlers.get_contact_activity_summary,
        ),
    )
}


def list_tools() -> list[dict[str, Any]]:
    return [tool.describe() for tool in TOOL_REGISTRY.values()]


def get_tool(name: str) -> CRMTool:
    if name not in TOOL_REGISTRY:
        raise ValueError(
            f"Unknown tool '{name}'. Available tools: {', '.join(sorted(TOOL_REGISTRY))}"
        )
    return TOOL_REGISTRY[name]


def format_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "input"
        problems.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "Invalid input: " + "; ".join(problems)


async def execute_tool(
    name: str,
    arguments: dict[str, Any] | None = None,
    client: HubSpotClient | None = None,
) -> dict[str, Any]:
    """
    Validate arguments and run a tool.

    Never raises for tool failures: validation errors, missing credentials and
    HubSpot errors all come back as {"ok": False, "error": ...}. Only an unknown
    tool name raises ValueError.
    """
    tool = get_tool(name)
    start_time = time.time()

    try:
        data = tool.input_model.model_validate(arguments or {})
    except ValidationError as e:
        result = failure(format_validation_error(e))
        log_tool_call(name, False, _elapsed_ms(start_time), error=result["error"])
        return result

    try:
        result = await tool.handler(client or get_hubspot_client(), data)
    except HubSpotError as e:
        result = failure_from_exception(e)
    except Exception as e:
        logger.error(
            "Unexpected tool error",
            tool=name,
            error=str(e),
            error_type=type(e).__name__,
        )
        result = failure_from_exception(e)

    log_tool_call(name, result.get("ok", False), _elapsed_ms(start_time), error=result.get("error"))
    return result


def _elapsed_ms(start_time: float) -> float:
    return round((time.time() - start_time) * 1000, 2)

"""
Tool API Routes
HTTP endpoints the agent runtime uses to discover and call CRM tools.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from crm_tools.infrastructure.observability.logging import get_logger
from crm_tools.models.api.tool_responses import ToolCatalogResponse, ToolDescriptor
from crm_tools.services.hubspot.client import HubSpotClient, get_hubspot_client
from crm_tools.tools.registry import TOOL_REGISTRY, execute_tool, list_tools
from crm_tools.tools.skill import SKILL_CONTEXT, SKILL_DESCRIPTION, SKILL_NAME

logger = get_logger(__name__)

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("", response_model=ToolCatalogResponse)
async def get_tool_catalog():
    """List available tools with their input schemas and the skill context."""
    tools = [ToolDescriptor(**descriptor) for descriptor in list_tools()]
    return ToolCatalogResponse(
        skill=SKILL_NAME,
        description=SKILL_DESCRIPTION,
        context=SKILL_CONTEXT,
        tools=tools,
        total_count=len(tools),
    )


@router.post("/{tool_name}")
async def call_tool(
    tool_name: str,
    arguments: dict[str, Any] | None = Body(default=None),
    client: HubSpotClient = Depends(get_hubspot_client),
) -> dict[str, Any]:
    """
    Run a tool. Always answers 200 with a result envelope; failures are
    reported as {"ok": false, "error": ...}.
    """
    if tool_name not in TOOL_REGISTRY:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown tool '{tool_name}'"
        )

    return await execute_tool(tool_name, arguments or {}, client=client)

# crm_tools/models/api/tool_responses.py
"""
Tool catalog response models.
"""

from typing import Any

from pydantic import BaseModel, Field


class ToolDescriptor(BaseModel):
    name: str
    description: str
    inputSchema: dict[str, Any] = Field(..., description="JSON schema of the tool input")


class ToolCatalogResponse(BaseModel):
    skill: str
    description: str
    context: str
    tools: list[ToolDescriptor]
    total_count: int


class ReadinessResponse(BaseModel):
    overall_ok: bool
    checks: dict[str, dict[str, Any]]

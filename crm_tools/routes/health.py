"""
Health check endpoints.
"""

from fastapi import APIRouter

from crm_tools.config import settings
from crm_tools.models.api.tool_responses import ReadinessResponse
from crm_tools.services.hubspot.client import MISSING_TOKEN_MESSAGE

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": "hubspot-crm-tools"}


@router.get("/readyz", response_model=ReadinessResponse)
async def readyz():
    """
    Readiness check. Only configuration is inspected; HubSpot itself is not
    called so probes never spend API quota.
    """
    checks = {}

    token_ok = settings.has_hubspot_token()
    checks["hubspot_token"] = {"ok": token_ok}
    if not token_ok:
        checks["hubspot_token"]["error"] = MISSING_TOKEN_MESSAGE

    checks["hubspot_base_url"] = {"ok": True, "url": settings.hubspot_base_url()}

    return ReadinessResponse(
        overall_ok=all(check["ok"] for check in checks.values()),
        checks=checks,
    )

"""
Uniform tool result envelope: {"ok": True, ...data} or {"ok": False, "error": ...}.
"""

from typing import Any

from crm_tools.services.hubspot.client import HubSpotError


def success(**data: Any) -> dict[str, Any]:
    return {"ok": True, **data}


def failure(error: str, status: int | None = None, **data: Any) -> dict[str, Any]:
    envelope: dict[str, Any] = {"ok": False, "error": error}
    if status is not None:
        envelope["status"] = status
    envelope.update(data)
    return envelope


def failure_from_exception(exc: Exception) -> dict[str, Any]:
    """Convert any exception into a failure envelope, keeping the remote status if known."""
    if isinstance(exc, HubSpotError):
        return failure(str(exc), status=exc.status_code)
    return failure(str(exc) or type(exc).__name__)

import asyncio
from typing import Any

import httpx
import pytest

from crm_tools.services.hubspot.client import HubSpotClient

BASE_URL = "https://api.hubapi.com"


class FakeHubSpot:
    """In-memory HubSpot API served through httpx.MockTransport."""

    def __init__(self):
        self.routes: dict[tuple[str, str], dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        json: Any = None,
        status_code: int = 200,
        exc: Exception | None = None,
        delay: float = 0,
    ) -> None:
        self.routes[(method, path)] = {
            "json": json,
            "status_code": status_code,
            "exc": exc,
            "delay": delay,
        }

    def add_contact(self, contact_id: str, **properties: str) -> None:
        self.add(
            "GET",
            f"/crm/v3/objects/contacts/{contact_id}",
            json={"id": contact_id, "properties": properties},
        )

    def add_associations(self, contact_id: str, kind: str, ids: list[str], **kwargs) -> None:
        self.add(
            "GET",
            f"/crm/v4/objects/contacts/{contact_id}/associations/{kind}",
            json={"results": [{"toObjectId": int(i), "associationTypes": []} for i in ids]},
            **kwargs,
        )

    def add_engagement(self, kind: str, engagement_id: str, **properties: str) -> None:
        self.add(
            "GET",
            f"/crm/v3/objects/{kind}/{engagement_id}",
            json={"id": engagement_id, "properties": properties},
        )

    def calls_to(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(
                404,
                json={
                    "status": "error",
                    "message": "resource not found",
                    "category": "OBJECT_NOT_FOUND",
                },
            )
        if route["delay"]:
            await asyncio.sleep(route["delay"])
        if route["exc"] is not None:
            raise route["exc"]
        return httpx.Response(route["status_code"], json=route["json"])

    def client(self, token: str | None = "test-token", **kwargs) -> HubSpotClient:
        return HubSpotClient(
            token=token if token is not None else "",
            base_url=BASE_URL,
            transport=httpx.MockTransport(self.handler),
            **kwargs,
        )


@pytest.fixture
def hubspot():
    return FakeHubSpot()


@pytest.fixture
def client(hubspot):
    return hubspot.client()


@pytest.fixture
def unauthenticated_client(hubspot):
    return hubspot.client(token=None)


@pytest.fixture
def jane_doe(hubspot):
    """Contact 501 with 2 calls, 1 note and nothing else."""
    hubspot.add_contact("501", email="jane@example.com", firstname="Jane", lastname="Doe")
    hubspot.add_associations("501", "calls", ["11", "12"])
    hubspot.add_associations("501", "emails", [])
    hubspot.add_associations("501", "notes", ["31"])
    hubspot.add_associations("501", "tasks", [])
    hubspot.add_associations("501", "meetings", [])
    hubspot.add_engagement(
        "calls",
        "11",
        hs_call_title="Discovery call",
        hs_call_status="COMPLETED",
        hs_call_direction="OUTBOUND",
        hs_createdate="2024-03-01T10:00:00.000Z",
    )
    hubspot.add_engagement(
        "calls",
        "12",
        hs_call_title="Follow-up",
        hs_call_status="COMPLETED",
        hs_call_direction="INBOUND",
        hs_createdate="2024-03-05T15:30:00.000Z",
    )
    hubspot.add_engagement(
        "notes",
        "31",
        hs_note_body="Interested in the enterprise plan. " * 5,
        hs_createdate="2024-03-03T09:00:00.000Z",
    )
    return "501"

"""
Tests for the tool and health endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from crm_tools.main import app
from crm_tools.services.hubspot.client import get_hubspot_client


@pytest.fixture
def api(hubspot):
    app.dependency_overrides[get_hubspot_client] = lambda: hubspot.client()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_healthz_endpoint(api):
    response = api.get("/healthz")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_readyz_reports_missing_token(api, monkeypatch):
    monkeypatch.setattr("crm_tools.routes.health.settings.HUBSPOT_PRIVATE_APP_TOKEN", None)

    data = api.get("/readyz").json()

    assert data["overall_ok"] is False
    assert data["checks"]["hubspot_token"]["ok"] is False


def test_readyz_with_token(api, monkeypatch):
    monkeypatch.setattr("crm_tools.routes.health.settings.HUBSPOT_PRIVATE_APP_TOKEN", "pat-123")

    data = api.get("/readyz").json()

    assert data["overall_ok"] is True
    assert "pat-123" not in str(data)


def test_tool_catalog(api):
    response = api.get("/tools")

    assert response.status_code == 200
    data = response.json()
    assert data["skill"] == "hubspotCRM"
    assert data["total_count"] == 6
    assert "getContactActivitySummary" in {tool["name"] for tool in data["tools"]}
    assert "Required HubSpot Scopes" in data["context"]


def test_call_tool_returns_envelope(api, hubspot):
    hubspot.add("GET", "/crm/v3/pipelines/deals", json={"results": [{"id": "default"}]})

    response = api.post("/tools/getDealPipelines", json={})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "pipelines": [{"id": "default"}]}


def test_call_tool_failure_is_still_200(api, hubspot):
    response = api.post("/tools/updateContact", json={"contactId": "601"})

    assert response.status_code == 200
    assert response.json() == {"ok": False, "error": "No properties to update provided."}
    assert hubspot.requests == []


def test_call_unknown_tool(api):
    response = api.post("/tools/dropDatabase", json={})

    assert response.status_code == 404

import json

import httpx
import pytest

from crm_tools.config import Settings
from crm_tools.services.hubspot.client import (
    HubSpotAPIError,
    HubSpotClient,
    HubSpotNotFoundError,
    MissingCredentialError,
)


@pytest.mark.asyncio
async def test_requests_carry_bearer_token_and_json_headers(hubspot, client):
    hubspot.add("POST", "/crm/v3/objects/contacts", json={"id": "1", "properties": {}})

    data = await client.post("/crm/v3/objects/contacts", {"properties": {"email": "a@b.co"}})
    await client.close()

    assert data == {"id": "1", "properties": {}}
    (request,) = hubspot.requests
    assert request.headers["Authorization"] == "Bearer test-token"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"properties": {"email": "a@b.co"}}


@pytest.mark.asyncio
async def test_get_sends_no_content_type(hubspot, client):
    hubspot.add("GET", "/crm/v3/pipelines/deals", json={"results": []})

    await client.get("/crm/v3/pipelines/deals")

    assert "Content-Type" not in hubspot.requests[0].headers


@pytest.mark.asyncio
async def test_missing_token_raises_without_network_call(hubspot, unauthenticated_client):
    with pytest.raises(MissingCredentialError) as exc:
        await unauthenticated_client.get("/crm/v3/pipelines/deals")

    assert str(exc.value) == "Missing HUBSPOT_PRIVATE_APP_TOKEN in environment."
    assert hubspot.requests == []


@pytest.mark.asyncio
async def test_error_message_comes_from_hubspot_body(hubspot, client):
    hubspot.add(
        "PATCH",
        "/crm/v3/objects/deals/9",
        status_code=400,
        json={"status": "error", "message": "Property values were not valid", "category": "VALIDATION_ERROR"},
    )

    with pytest.raises(HubSpotAPIError) as exc:
        await client.patch("/crm/v3/objects/deals/9", {"properties": {"dealstage": "nope"}})

    assert str(exc.value) == "Property values were not valid"
    assert exc.value.status_code == 400
    assert exc.value.error_code == "VALIDATION_ERROR"
    assert not isinstance(exc.value, HubSpotNotFoundError)


@pytest.mark.asyncio
async def test_error_body_without_message_is_json_encoded(hubspot, client):
    hubspot.add("GET", "/crm/v3/pipelines/deals", status_code=403, json={"status": "error"})

    with pytest.raises(HubSpotAPIError) as exc:
        await client.get("/crm/v3/pipelines/deals")

    assert str(exc.value) == '{"status": "error"}'


@pytest.mark.asyncio
async def test_404_maps_to_not_found(hubspot, client):
    with pytest.raises(HubSpotNotFoundError) as exc:
        await client.get("/crm/v3/objects/contacts/missing")

    assert exc.value.status_code == 404
    assert str(exc.value) == "resource not found"


@pytest.mark.asyncio
async def test_transport_error_is_remote_failure(hubspot, client):
    hubspot.add("GET", "/crm/v3/pipelines/deals", exc=httpx.ConnectError("connection refused"))

    with pytest.raises(HubSpotAPIError) as exc:
        await client.get("/crm/v3/pipelines/deals")

    assert "connection refused" in str(exc.value)
    assert exc.value.error_code == "transport_error"


@pytest.mark.asyncio
async def test_timeout_is_remote_failure(hubspot, client):
    hubspot.add("GET", "/crm/v3/pipelines/deals", exc=httpx.ReadTimeout("read timed out"))

    with pytest.raises(HubSpotAPIError) as exc:
        await client.get("/crm/v3/pipelines/deals")

    assert exc.value.error_code == "timeout"


@pytest.mark.asyncio
async def test_base_url_trailing_slashes_are_stripped(hubspot):
    client = HubSpotClient(
        token="t",
        base_url="https://eu1.api.hubapi.com///",
        transport=httpx.MockTransport(hubspot.handler),
    )
    hubspot.add("GET", "/crm/v3/pipelines/deals", json={"results": []})

    await client.get("/crm/v3/pipelines/deals")

    assert str(hubspot.requests[0].url) == "https://eu1.api.hubapi.com/crm/v3/pipelines/deals"


def test_settings_base_url_default_and_override():
    assert Settings(_env_file=None).hubspot_base_url() == "https://api.hubapi.com"
    assert (
        Settings(_env_file=None, HUBSPOT_API_BASE_URL="https://example.test/").hubspot_base_url()
        == "https://example.test"
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [[], "ok", 42])
async def test_success_body_must_be_an_object(hubspot, client, body):
    hubspot.add("GET", "/crm/v3/pipelines/deals", json=body)

    with pytest.raises(HubSpotAPIError) as exc:
        await client.get("/crm/v3/pipelines/deals")

    assert str(exc.value) == "Invalid response format: expected a JSON object"
    assert exc.value.status_code == 200

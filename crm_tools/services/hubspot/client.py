"""
HubSpot CRM API client.
Handles bearer-token authentication, JSON request/response handling and
error mapping for every call the CRM tools make.
"""

import json
from typing import Any

import httpx

from crm_tools.config import settings
from crm_tools.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

TOKEN_ENV_NAME = "HUBSPOT_PRIVATE_APP_TOKEN"
MISSING_TOKEN_MESSAGE = f"Missing {TOKEN_ENV_NAME} in environment."


class HubSpotError(Exception):
    """Base exception for HubSpot API errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        status_code: int | None = None,
        response_data: dict | None = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.status_code = status_code
        self.response_data = response_data or {}


class MissingCredentialError(HubSpotError):
    """No private app token is configured; raised before any request is sent."""

    def __init__(self, message: str = MISSING_TOKEN_MESSAGE):
        super().__init__(message, error_code="missing_credential")


class InvalidInputError(HubSpotError):
    """A required identifier or property is absent; raised before any request."""

    def __init__(self, message: str):
        super().__init__(message, error_code="invalid_input")


class HubSpotAPIError(HubSpotError):
    """Non-success HTTP status or transport failure on a HubSpot call."""


class HubSpotNotFoundError(HubSpotAPIError):
    """The requested CRM object does not exist (HTTP 404)."""


class HubSpotClient:
    """
    Thin async client for the HubSpot CRM REST API.

    One instance owns one httpx.AsyncClient. The token and base URL are read
    from settings unless given explicitly. No retries are attempted: a failed
    call is final and surfaces as a HubSpotAPIError.
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token = token if token is not None else settings.HUBSPOT_PRIVATE_APP_TOKEN
        self.base_url = (base_url or settings.hubspot_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.HUBSPOT_REQUEST_TIMEOUT
        self._client = self._create_client(transport)

    def _create_client(self, transport: httpx.AsyncBaseTransport | None) -> httpx.AsyncClient:
        """Create async HTTP client for the HubSpot API."""
        timeout = httpx.Timeout(self.timeout)
        limits = httpx.Limits(max_keepalive_connections=10, max_connections=20)
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, limits=limits, transport=transport
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def ensure_token(self) -> None:
        """Raise MissingCredentialError if no token is configured."""
        if not self.token:
            raise MissingCredentialError()

    def _get_auth_headers(self, with_body: bool = False) -> dict:
        """Get authorization headers for HubSpot API requests."""
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
        }
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
        operation: str | None = None,
    ) -> dict:
        """
        Send one authenticated request and return the parsed JSON body.

        Args:
            method: HTTP method
            path: Path relative to the base URL, e.g. /crm/v3/objects/contacts
            params: Query parameters
            json_body: JSON request body
            operation: Operation name for logging

        Returns:
            dict: Parsed response data ({} for empty bodies)

        Raises:
            MissingCredentialError: If no token is configured
            HubSpotNotFoundError: If the object does not exist
            HubSpotAPIError: On any other non-success status or transport error
        """
        self.ensure_token()
        operation = operation or f"{method} {path}"

        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json_body,
                headers=self._get_auth_headers(with_body=json_body is not None),
            )
        except httpx.TimeoutException as e:
            logger.warning(f"HubSpot {operation} timed out", error=str(e))
            raise HubSpotAPIError(f"HubSpot request timed out: {e}", error_code="timeout") from e
        except httpx.RequestError as e:
            logger.warning(f"HubSpot {operation} transport error", error=str(e))
            raise HubSpotAPIError(str(e) or type(e).__name__, error_code="transport_error") from e

        return self._handle_api_response(response, operation)

    async def get(self, path: str, params: dict[str, Any] | None = None, **kwargs) -> dict:
        return await self.request("GET", path, params=params, **kwargs)

    async def post(self, path: str, json_body: dict[str, Any], **kwargs) -> dict:
        return await self.request("POST", path, json_body=json_body, **kwargs)

    async def patch(self, path: str, json_body: dict[str, Any], **kwargs) -> dict:
        return await self.request("PATCH", path, json_body=json_body, **kwargs)

    def _handle_api_response(self, response: httpx.Response, operation: str) -> dict:
        """
        Handle and validate a HubSpot API response.

        HubSpot error bodies look like
        {"status": "error", "message": "...", "category": "OBJECT_NOT_FOUND"}.
        """
        logger.debug(
            f"HubSpot {operation} response",
            status_code=response.status_code,
            response_size=len(response.content),
        )

        if response.is_success:
            try:
                data = response.json() if response.content else {}
            except ValueError as e:
                logger.error(f"Failed to parse HubSpot {operation} response", error=str(e))
                raise HubSpotAPIError(
                    f"Invalid response format: {e}", status_code=response.status_code
                ) from e
            if not isinstance(data, dict):
                logger.error(
                    f"Unexpected HubSpot {operation} response",
                    response_type=type(data).__name__,
                )
                raise HubSpotAPIError(
                    "Invalid response format: expected a JSON object",
                    status_code=response.status_code,
                )
            return data

        try:
            error_data = response.json() if response.content else {}
        except ValueError:
            error_data = None

        if isinstance(error_data, dict) and error_data:
            message = error_data.get("message") or json.dumps(error_data)
            error_code = error_data.get("category")
        else:
            message = f"HubSpot API error (HTTP {response.status_code})"
            error_code = None
            error_data = {}

        logger.error(
            f"HubSpot {operation} failed",
            status_code=response.status_code,
            error_code=error_code,
            error_message=message,
        )

        error_class = HubSpotNotFoundError if response.status_code == 404 else HubSpotAPIError
        raise error_class(
            message,
            error_code=error_code,
            status_code=response.status_code,
            response_data=error_data,
        )


_hubspot_client: HubSpotClient | None = None


def get_hubspot_client() -> HubSpotClient:
    """Shared client built from settings on first use."""
    global _hubspot_client
    if _hubspot_client is None:
        _hubspot_client = HubSpotClient()
    return _hubspot_client


async def close_hubspot_client() -> None:
    global _hubspot_client
    if _hubspot_client is not None:
        await _hubspot_client.close()
        _hubspot_client = None

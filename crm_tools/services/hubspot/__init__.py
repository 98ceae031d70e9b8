"""
HubSpot API access.

All CRM calls go through HubSpotClient; errors share the HubSpotError root.
"""

from crm_tools.services.hubspot.client import (
    HubSpotAPIError,
    HubSpotClient,
    HubSpotError,
    HubSpotNotFoundError,
    InvalidInputError,
    MissingCredentialError,
    get_hubspot_client,
)

__all__ = [
    "HubSpotClient",
    "HubSpotError",
    "HubSpotAPIError",
    "HubSpotNotFoundError",
    "InvalidInputError",
    "MissingCredentialError",
    "get_hubspot_client",
]

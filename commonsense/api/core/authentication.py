"""
Authentication
==============

Helpers for configuring and applying credentials to Common Sense API
requests.

The API identifies callers with two static values:

- client id: the consumer's client identifier
- app id:    the consuming application's identifier

They can travel in one of two places, chosen per client:

- headers (default):
      client-id: <client id>
      app-id: <app id>
- query string:
      ?clientId=<client id>&appId=<app id>&...

In this package credentials are *context* attached to the client config,
not global state. This module provides:

- Credentials: typed configuration for the identity values
- CredentialPlacement: where the values are sent
- build_auth_headers(): headers for a client, built once at construction
- build_auth_query(): leading query parameters for the query variant
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional
import os

# Environment variable names.
ENV_CLIENT_ID = "COMMONSENSE_CLIENT_ID"
ENV_APP_ID = "COMMONSENSE_APP_ID"
ENV_CREDENTIALS = "COMMONSENSE_CREDENTIALS"

HEADER_CLIENT_ID = "client-id"
HEADER_APP_ID = "app-id"
QUERY_CLIENT_ID = "clientId"
QUERY_APP_ID = "appId"


class MissingCredentialsError(RuntimeError):
    """Raised when no client id / app id can be found."""


class CredentialPlacement(str, Enum):
    HEADERS = "headers"
    QUERY = "query"


@dataclass(frozen=True)
class Credentials:
    """
    Identity of the calling application.

    Attributes:
        client_id:
            Client identifier issued by Common Sense.
        app_id:
            Application identifier issued by Common Sense.
        placement:
            Whether the values are sent as headers or as query parameters.
    """

    client_id: str
    app_id: str
    placement: CredentialPlacement = CredentialPlacement.HEADERS

    @classmethod
    def from_env(cls, placement: Optional[CredentialPlacement] = None) -> "Credentials":
        """
        Load credentials from environment variables.

        Required:
            - COMMONSENSE_CLIENT_ID
            - COMMONSENSE_APP_ID

        Optional:
            - COMMONSENSE_CREDENTIALS ("headers" or "query")

        Raises:
            MissingCredentialsError: if either id is not set.
        """
        client_id = os.getenv(ENV_CLIENT_ID)
        app_id = os.getenv(ENV_APP_ID)
        missing = [name for name, value in ((ENV_CLIENT_ID, client_id), (ENV_APP_ID, app_id)) if not value]
        if missing:
            raise MissingCredentialsError(
                f"Missing credentials: set {', '.join(missing)} in your environment."
            )

        if placement is None:
            placement = CredentialPlacement(os.getenv(ENV_CREDENTIALS) or CredentialPlacement.HEADERS.value)

        return cls(client_id=client_id, app_id=app_id, placement=placement)


def build_auth_headers(
    credentials: Credentials,
    extra_headers: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Build the headers sent with every request of a client.

    Returns a dict containing:
        - client-id: <client_id>   (header placement only)
        - app-id: <app_id>         (header placement only)
        - any extra headers, which win on key collisions
    """
    headers: Dict[str, str] = {}

    if credentials.placement is CredentialPlacement.HEADERS:
        headers[HEADER_CLIENT_ID] = credentials.client_id
        headers[HEADER_APP_ID] = credentials.app_id

    if extra_headers:
        headers.update(extra_headers)

    return headers


def build_auth_query(credentials: Credentials) -> Dict[str, str]:
    """
    Build the identity query parameters. Empty for header placement.
    """
    if credentials.placement is not CredentialPlacement.QUERY:
        return {}
    return {
        QUERY_CLIENT_ID: credentials.client_id,
        QUERY_APP_ID: credentials.app_id,
    }


__all__ = [
    "Credentials",
    "CredentialPlacement",
    "MissingCredentialsError",
    "build_auth_headers",
    "build_auth_query",
    "ENV_CLIENT_ID",
    "ENV_APP_ID",
    "ENV_CREDENTIALS",
]

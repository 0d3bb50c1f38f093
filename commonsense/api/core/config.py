"""
Client configuration.

A `ClientConfig` is created once per client and never mutated; derived
configurations (another platform, an extra header) are new objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Union
import os

from commonsense.api.core.authentication import CredentialPlacement, Credentials

API_VERSION = 3

DEFAULT_HOST = "https://api.commonsense.org"
DEV_HOST = "https://api-dev.commonsense.org"

ENV_HOST = "COMMONSENSE_HOST"
ENV_MODE = "COMMONSENSE_MODE"
ENV_PLATFORM = "COMMONSENSE_PLATFORM"
ENV_DEBUG = "COMMONSENSE_DEBUG"

_TRUTHY = {"1", "true", "yes", "on"}


class Platform(str, Enum):
    """URL segment selecting a sub-API of the service."""

    EDUCATION = "education"
    MEDIA = "media"
    GLOBAL = "global"

    @classmethod
    def parse(cls, value: Union[str, Platform]) -> "Platform":
        if isinstance(value, Platform):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown platform '{value}'. Expected one of: {choices}") from None


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable configuration for one client instance.

    Attributes:
        credentials:
            Client/app identity and where it is sent.
        host:
            Scheme and host of the API, e.g. "https://api.commonsense.org".
        version:
            API version; rendered as "v{version}" in request paths.
        platform:
            Platform segment placed after the version.
        debug:
            When set, requests are composed but never sent and every call
            resolves to a fixed ``{"success": 1}`` payload.
        timeout:
            Default transport timeout in seconds for clients that build
            their own httpx adapter.
        extra_headers:
            Additional headers sent with every request.
    """

    credentials: Credentials
    host: str = DEFAULT_HOST
    version: int = API_VERSION
    platform: Platform = Platform.GLOBAL
    debug: bool = False
    timeout: Optional[float] = 10.0
    extra_headers: Dict[str, str] = field(default_factory=dict)

    @property
    def client_id(self) -> str:
        return self.credentials.client_id

    @property
    def app_id(self) -> str:
        return self.credentials.app_id

    @classmethod
    def create(
        cls,
        client_id: str,
        app_id: str,
        *,
        host: Optional[str] = None,
        mode: Optional[str] = None,
        platform: Union[str, Platform] = Platform.GLOBAL,
        placement: CredentialPlacement = CredentialPlacement.HEADERS,
        debug: bool = False,
    ) -> "ClientConfig":
        """
        Convenience constructor mirroring the options accepted by the API's
        other client libraries: ``host`` wins, otherwise ``mode="dev"``
        selects the dev host and anything else the production host.
        """
        if not host:
            host = DEV_HOST if mode == "dev" else DEFAULT_HOST
        return cls(
            credentials=Credentials(client_id=client_id, app_id=app_id, placement=placement),
            host=host,
            platform=Platform.parse(platform),
            debug=debug,
        )

    @classmethod
    def from_env(cls, platform: Optional[Union[str, Platform]] = None) -> "ClientConfig":
        """
        Load configuration from environment variables.

        Required:
            - COMMONSENSE_CLIENT_ID
            - COMMONSENSE_APP_ID

        Optional:
            - COMMONSENSE_HOST
            - COMMONSENSE_MODE       ("dev" selects the dev host)
            - COMMONSENSE_PLATFORM   ("education", "media", "global")
            - COMMONSENSE_CREDENTIALS ("headers", "query")
            - COMMONSENSE_DEBUG      ("1", "true", "yes")

        Raises:
            MissingCredentialsError: if either id is not set.
        """
        credentials = Credentials.from_env()

        host = os.getenv(ENV_HOST) or None
        if not host:
            host = DEV_HOST if (os.getenv(ENV_MODE) or "").lower() == "dev" else DEFAULT_HOST

        if platform is None:
            platform = os.getenv(ENV_PLATFORM) or Platform.GLOBAL

        debug = (os.getenv(ENV_DEBUG) or "").strip().lower() in _TRUTHY

        return cls(
            credentials=credentials,
            host=host,
            platform=Platform.parse(platform),
            debug=debug,
        )

    def with_platform(self, platform: Union[str, Platform]) -> "ClientConfig":
        """Return a copy targeting another platform."""
        return replace(self, platform=Platform.parse(platform))

    def with_header(self, key: str, value: str) -> "ClientConfig":
        """Return a copy that also sends header ``key: value``."""
        headers = dict(self.extra_headers)
        headers[key] = value
        return replace(self, extra_headers=headers)


__all__ = [
    "API_VERSION",
    "DEFAULT_HOST",
    "DEV_HOST",
    "ClientConfig",
    "Platform",
]

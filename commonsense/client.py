from __future__ import annotations

from typing import Any, Optional, Union

from commonsense.api.content import AsyncContentMixin, ContentMixin
from commonsense.api.core.authentication import build_auth_headers
from commonsense.api.core.config import ClientConfig, Platform
from commonsense.api.platforms import PlatformProfile, profile_for
from commonsense.http_client import (
    AsyncCommonSenseHTTPClient,
    AsyncHttpxCommonSenseHTTPClient,
    CommonSenseHTTPClient,
    HttpxCommonSenseHTTPClient,
)


class CommonSenseClient(ContentMixin):
    """
    Blocking client for one platform of the Common Sense API.

        config = ClientConfig.create("my-client-id", "my-app-id", platform="education")
        with CommonSenseClient(config) as client:
            result = client.get_list("products", {"limit": 5, "fields": ["id", "title"]})
    """

    def __init__(self, config: ClientConfig, http: Optional[CommonSenseHTTPClient] = None):
        self._config = config
        self._profile: PlatformProfile = profile_for(config.platform)
        self._headers = build_auth_headers(config.credentials, config.extra_headers)
        self._http = http if http is not None else HttpxCommonSenseHTTPClient(timeout=config.timeout)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def profile(self) -> PlatformProfile:
        return self._profile

    def for_platform(self, platform: Union[str, Platform]) -> "CommonSenseClient":
        """Return a client for another platform sharing this client's transport."""
        return CommonSenseClient(self._config.with_platform(platform), http=self._http)

    def education(self) -> "CommonSenseClient":
        return self.for_platform(Platform.EDUCATION)

    def media(self) -> "CommonSenseClient":
        return self.for_platform(Platform.MEDIA)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "CommonSenseClient":
        return self

    def __exit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Optional[Any]) -> None:
        self.close()


class AsyncCommonSenseClient(AsyncContentMixin):
    """
    Asyncio client; calls are independent and may run concurrently:

        async with AsyncCommonSenseClient(config) as client:
            small, large = await asyncio.gather(
                client.get_list("products", {"limit": 3}),
                client.get_list("products", {"limit": 10}),
            )
    """

    def __init__(self, config: ClientConfig, http: Optional[AsyncCommonSenseHTTPClient] = None):
        self._config = config
        self._profile: PlatformProfile = profile_for(config.platform)
        self._headers = build_auth_headers(config.credentials, config.extra_headers)
        self._http = http if http is not None else AsyncHttpxCommonSenseHTTPClient(timeout=config.timeout)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def profile(self) -> PlatformProfile:
        return self._profile

    def for_platform(self, platform: Union[str, Platform]) -> "AsyncCommonSenseClient":
        return AsyncCommonSenseClient(self._config.with_platform(platform), http=self._http)

    def education(self) -> "AsyncCommonSenseClient":
        return self.for_platform(Platform.EDUCATION)

    def media(self) -> "AsyncCommonSenseClient":
        return self.for_platform(Platform.MEDIA)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncCommonSenseClient":
        return self

    async def __aexit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Optional[Any]) -> None:
        await self.aclose()

"""
Content API
===========

Generic read operations shared by every platform.

Endpoints
---------
GET /v{version}/{platform}/{type}                      → list items of a type
GET /v{version}/{platform}/{type}/{id}                 → retrieve one item
GET /v{version}/{platform}/search/{type}/{query}       → text search (education)
GET /v{version}/{platform}/terms/{vocabulary}          → taxonomy terms (education)

Every operation accepts request options (see `commonsense.api.core.query`),
an optional err-first ``callback`` and an optional per-call ``timeout``, and
returns an `ApiResult`.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
import logging
from typing import Any, Callable, Dict, Optional

from commonsense.api.core.config import ClientConfig
from commonsense.api.core.query import PreparedRequest, RequestOptions, prepare_request, quote_segment
from commonsense.api.core.results import (
    ApiResult,
    ResultCallback,
    debug_result,
    deliver,
    interpret,
    network_failure,
)
from commonsense.api.platforms import ITEM, PlatformProfile
from commonsense.http_client import (
    AsyncCommonSenseHTTPClient,
    CommonSenseHTTPClient,
    HTTPResponse,
    TransportError,
)

logger = logging.getLogger(__name__)


# ───────────────────────────────────────────────────────────────
# Convenience wrapper bound to one content type
# ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ContentTypeEndpoint:
    """
    Operations bound to a single content type:

        products = client.content_type("products")
        products.list({"limit": 5})
        products.item(123, {"fields": ["id", "title"]})

    On an async client the methods return coroutines.
    """

    client: Any
    content_type: str

    def list(self, options: Optional[RequestOptions] = None, callback: Optional[ResultCallback] = None, timeout: Optional[float] = None):
        return self.client.get_list(self.content_type, options, callback=callback, timeout=timeout)

    def item(self, item_id: Any, options: Optional[RequestOptions] = None, callback: Optional[ResultCallback] = None, timeout: Optional[float] = None):
        return self.client.get_item(self.content_type, item_id, options, callback=callback, timeout=timeout)

    def search(self, query: str, options: Optional[RequestOptions] = None, callback: Optional[ResultCallback] = None, timeout: Optional[float] = None):
        return self.client.search(self.content_type, query, options, callback=callback, timeout=timeout)


# ───────────────────────────────────────────────────────────────
# Shared request plumbing
# ───────────────────────────────────────────────────────────────

def _require_name(value: Any, what: str) -> str:
    if not isinstance(value, str) or not value.strip("/ "):
        raise ValueError(f"{what} must be a non-empty string.")
    return value


class _ContentRequests:
    """
    Path building and response handling common to the blocking and async
    mixins. Assumes the host class sets `_config`, `_profile` and `_headers`.
    """

    _config: ClientConfig
    _profile: PlatformProfile
    _headers: Dict[str, str]

    # ── Paths ──────────────────────────────────────────────────

    @staticmethod
    def _list_path(content_type: str) -> str:
        return _require_name(content_type, "type")

    @staticmethod
    def _item_path(content_type: str, item_id: Any) -> str:
        if item_id is None or item_id == "":
            raise ValueError("item_id must be provided.")
        return f"{_require_name(content_type, 'type')}/{quote_segment(item_id)}"

    def _search_path(self, content_type: str, query: str) -> str:
        self._profile.require("search")
        return f"search/{_require_name(content_type, 'type')}/{quote_segment(_require_name(query, 'query'))}"

    def _terms_path(self, vocabulary: Any) -> str:
        self._profile.require("terms")
        if vocabulary is None or vocabulary == "":
            raise ValueError("vocabulary must be provided.")
        return f"terms/{quote_segment(vocabulary)}"

    # ── Request / response ─────────────────────────────────────

    def _prepare(self, path: str, options: Optional[RequestOptions]) -> PreparedRequest:
        return prepare_request(self._config, path, options, headers=self._headers)

    @staticmethod
    def _interpret(prepared: PreparedRequest, resp: HTTPResponse) -> ApiResult:
        result = interpret(
            resp.status_code,
            resp.text,
            prepared.tree_fields,
            reason=resp.reason,
            request=prepared,
        )
        if not result.ok:
            logger.debug("GET %s failed: %s", prepared.url, result.message)
        return result

    @staticmethod
    def _network_failure(prepared: PreparedRequest, exc: TransportError) -> ApiResult:
        logger.warning("GET %s did not complete: %s", prepared.url, exc)
        return network_failure(exc, request=prepared)

    def _debug(self, prepared: PreparedRequest) -> ApiResult:
        logger.debug("Debug mode: not sending GET %s", prepared.url)
        return debug_result(prepared)

    # ── Typed catalog access ───────────────────────────────────

    def content_type(self, name: str) -> ContentTypeEndpoint:
        """
        Return the operations bound to one content type of this platform.

        Raises:
            ValueError: if the platform catalog has no such type.
        """
        if not self._profile.has_type(name):
            available = ", ".join(self._profile.content_types) or "(none)"
            raise ValueError(
                f"Unknown content type '{name}' for platform '{self._profile.platform.value}'. "
                f"Available types: {available}"
            )
        return ContentTypeEndpoint(self, name)

    def wrapper(self, name: str) -> Callable[..., Any]:
        """
        Resolve a convenience name to a bound operation:

            client.wrapper("get_products_list")({"limit": 3})
            client.wrapper("getProductsItem")(123)
        """
        try:
            content_type, operation = self._profile.wrapper_table()[name]
        except KeyError:
            raise ValueError(
                f"Unknown operation '{name}' for platform '{self._profile.platform.value}'."
            ) from None
        method = self.get_item if operation == ITEM else self.get_list  # type: ignore[attr-defined]
        return partial(method, content_type)


# ───────────────────────────────────────────────────────────────
# ContentMixin (blocking)
# ───────────────────────────────────────────────────────────────

class ContentMixin(_ContentRequests):
    """
    Blocking wrapper for the content endpoints:

        client.get_list("products", {"limit": 5})
        client.get_item("products", 123)
        client.search("products", "fractions")
        client.get_terms_list("subjects", {"tree": ["children"]})

    Assumes `self._http` is a CommonSenseHTTPClient instance.
    """

    _http: CommonSenseHTTPClient

    def _execute(
        self,
        prepared: PreparedRequest,
        callback: Optional[ResultCallback],
        timeout: Optional[float],
    ) -> ApiResult:
        if self._config.debug:
            return deliver(self._debug(prepared), callback)
        try:
            resp = self._http.get(prepared.url, headers=prepared.headers, timeout=timeout)
        except TransportError as exc:
            return deliver(self._network_failure(prepared, exc), callback)
        return deliver(self._interpret(prepared, resp), callback)

    def get_list(
        self,
        content_type: str,
        options: Optional[RequestOptions] = None,
        callback: Optional[ResultCallback] = None,
        timeout: Optional[float] = None,
    ) -> ApiResult:
        """
        Get a list of items of a content type (products, blogs, ...).
        """
        return self._execute(self._prepare(self._list_path(content_type), options), callback, timeout)

    def get_item(
        self,
        content_type: str,
        item_id: Any,
        options: Optional[RequestOptions] = None,
        callback: Optional[ResultCallback] = None,
        timeout: Optional[float] = None,
    ) -> ApiResult:
        """
        Get a single item of a content type by its system id.
        """
        return self._execute(self._prepare(self._item_path(content_type, item_id), options), callback, timeout)

    def search(
        self,
        content_type: str,
        query: str,
        options: Optional[RequestOptions] = None,
        callback: Optional[ResultCallback] = None,
        timeout: Optional[float] = None,
    ) -> ApiResult:
        """
        Full-text search within a content type.

        Raises:
            UnsupportedOperationError: on platforms without search.
        """
        return self._execute(self._prepare(self._search_path(content_type, query), options), callback, timeout)

    def get_terms_list(
        self,
        vocabulary: Any,
        options: Optional[RequestOptions] = None,
        callback: Optional[ResultCallback] = None,
        timeout: Optional[float] = None,
    ) -> ApiResult:
        """
        Get the taxonomy terms of a vocabulary.

        Pass ``{"tree": [...]}`` to nest term lists found in the named
        response fields.

        Raises:
            UnsupportedOperationError: on platforms without taxonomies.
        """
        return self._execute(self._prepare(self._terms_path(vocabulary), options), callback, timeout)


# ───────────────────────────────────────────────────────────────
# AsyncContentMixin
# ───────────────────────────────────────────────────────────────

class AsyncContentMixin(_ContentRequests):
    """
    Async counterpart of `ContentMixin`; every operation is a coroutine:

        result = await client.get_list("products", {"limit": 5})

    Assumes `self._http` is an AsyncCommonSenseHTTPClient instance.
    """

    _http: AsyncCommonSenseHTTPClient

    async def _execute(
        self,
        prepared: PreparedRequest,
        callback: Optional[ResultCallback],
        timeout: Optional[float],
    ) -> ApiResult:
        if self._config.debug:
            return deliver(self._debug(prepared), callback)
        try:
            resp = await self._http.get(prepared.url, headers=prepared.headers, timeout=timeout)
        except TransportError as exc:
            return deliver(self._network_failure(prepared, exc), callback)
        return deliver(self._interpret(prepared, resp), callback)

    async def get_list(
        self,
        content_type: str,
        options: Optional[RequestOptions] = None,
        callback: Optional[ResultCallback] = None,
        timeout: Optional[float] = None,
    ) -> ApiResult:
        return await self._execute(self._prepare(self._list_path(content_type), options), callback, timeout)

    async def get_item(
        self,
        content_type: str,
        item_id: Any,
        options: Optional[RequestOptions] = None,
        callback: Optional[ResultCallback] = None,
        timeout: Optional[float] = None,
    ) -> ApiResult:
        return await self._execute(self._prepare(self._item_path(content_type, item_id), options), callback, timeout)

    async def search(
        self,
        content_type: str,
        query: str,
        options: Optional[RequestOptions] = None,
        callback: Optional[ResultCallback] = None,
        timeout: Optional[float] = None,
    ) -> ApiResult:
        return await self._execute(self._prepare(self._search_path(content_type, query), options), callback, timeout)

    async def get_terms_list(
        self,
        vocabulary: Any,
        options: Optional[RequestOptions] = None,
        callback: Optional[ResultCallback] = None,
        timeout: Optional[float] = None,
    ) -> ApiResult:
        return await self._execute(self._prepare(self._terms_path(vocabulary), options), callback, timeout)


__all__ = [
    "AsyncContentMixin",
    "ContentMixin",
    "ContentTypeEndpoint",
]

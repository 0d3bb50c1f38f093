"""
Request building
================

Turns a client configuration, an endpoint path and per-call options into a
fully qualified GET URL:

    {host}/v{version}/{platform}/{path}?{query}

Query composition, in order:

1. identity parameters (``clientId``, ``appId``) for query placement
2. defaults ``limit=10``, ``page=1``, overridden by valid caller values
3. ``fields`` when the caller asked for a field selection
4. every other option as a pass-through filter, lists comma-joined

``tree`` never reaches the query string; it is a local instruction for the
response mapper and is carried on the `PreparedRequest`.

Nothing here stores state: every call builds a fresh query mapping and
returns a fresh `PreparedRequest`, so concurrent calls on one client never
see each other's values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import quote, unquote

from commonsense.api.core.authentication import build_auth_query
from commonsense.api.core.config import ClientConfig

logger = logging.getLogger(__name__)

JSON = Dict[str, Any]
RequestOptions = Mapping[str, Any]
QueryParameters = Dict[str, Any]

DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1

LIMIT = "limit"
PAGE = "page"
FIELDS = "fields"
TREE = "tree"
RESERVED_OPTIONS = frozenset({LIMIT, PAGE, FIELDS, TREE})

# Characters encodeURIComponent leaves alone, besides letters, digits and "_.-~".
_URI_COMPONENT_SAFE = "!*'()"


@dataclass(frozen=True)
class PreparedRequest:
    """
    A fully composed request, scoped to a single call.

    This is the record of "the last request" for whoever issued it: results
    carry it as ``result.request`` so callers can inspect the URL and query
    that were sent.
    """

    url: str
    query: QueryParameters
    headers: Dict[str, str] = field(default_factory=dict)
    tree_fields: Tuple[str, ...] = ()


# ── Option coercion ─────────────────────────────────────────────

def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _positive_int(value: Any) -> Optional[int]:
    """
    Return ``value`` as a positive int, or None if it is not one.

    Accepts ints and strings of decimal digits; bools, floats, zero,
    negatives and other numeric characters (superscripts, fractions) are
    rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 1 else None
    if isinstance(value, str) and value.strip().isdecimal():
        try:
            number = int(value.strip())
        except ValueError:
            return None
        return number if number >= 1 else None
    return None


def _join(values: Sequence[Any]) -> str:
    return ",".join(_stringify(v) for v in values if v is not None)


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _fields_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if _is_sequence(value):
        joined = _join(value)
        return joined or None
    text = _stringify(value)
    return text or None


def tree_fields(options: Optional[RequestOptions]) -> Tuple[str, ...]:
    """
    Field names for which the response should be assembled into term trees.

    Accepts a list of names or a comma-separated string.
    """
    if not options:
        return ()
    value = options.get(TREE)
    if not value:
        return ()
    if isinstance(value, str):
        names: List[str] = [part.strip() for part in value.split(",")]
    else:
        names = [str(part).strip() for part in value]
    return tuple(name for name in names if name)


# ── Query composition ───────────────────────────────────────────

def build_query(config: ClientConfig, options: Optional[RequestOptions] = None) -> QueryParameters:
    """
    Compose the query parameters for one request.

    Invalid ``limit`` / ``page`` values (zero, negative, non-numeric) fall
    back to the defaults rather than failing the call.
    """
    options = options or {}

    query: QueryParameters = dict(build_auth_query(config.credentials))
    query[LIMIT] = DEFAULT_LIMIT
    query[PAGE] = DEFAULT_PAGE

    for name in (LIMIT, PAGE):
        if name not in options:
            continue
        number = _positive_int(options[name])
        if number is None:
            logger.debug("Ignoring invalid %s=%r; using default %s", name, options[name], query[name])
            continue
        query[name] = number

    fields = _fields_value(options.get(FIELDS))
    if fields is not None:
        query[FIELDS] = fields

    for key, value in options.items():
        if key in RESERVED_OPTIONS or value is None:
            continue
        query[key] = _join(value) if _is_sequence(value) else value

    return query


def serialize(query: Mapping[str, Any]) -> str:
    """
    Convert a mapping into a URL query string.

    Keys and values are percent-encoded like JavaScript's
    ``encodeURIComponent`` and pairs keep the mapping's order:

        serialize({"hello": "world", "foo": "bar"}) == "hello=world&foo=bar"
    """
    return "&".join(
        f"{quote(_stringify(key), safe=_URI_COMPONENT_SAFE)}={quote(_stringify(value), safe=_URI_COMPONENT_SAFE)}"
        for key, value in query.items()
    )


def deserialize(query: str) -> Dict[str, str]:
    """
    Convert a URL query string back into a mapping of strings.

        deserialize("hello=world&foo=bar") == {"hello": "world", "foo": "bar"}
    """
    result: Dict[str, str] = {}
    if not query:
        return result
    for pair in query.split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        result[unquote(key)] = unquote(value)
    return result


# ── URL composition ─────────────────────────────────────────────

def quote_segment(value: Any) -> str:
    """Percent-encode one dynamic path piece (an id, a search string)."""
    return quote(_stringify(value), safe=_URI_COMPONENT_SAFE)


def build_path(config: ClientConfig, path: str) -> str:
    """
    Join host, version, platform and path with single slashes.

    Raises:
        ValueError: if ``path`` has no non-slash content.
    """
    pieces = [piece for piece in path.split("/") if piece]
    if not pieces:
        raise ValueError("path must be a non-empty relative segment.")

    host = config.host.rstrip("/")
    platform = [piece for piece in config.platform.value.split("/") if piece]
    return "/".join([host, f"v{config.version}", *platform, *pieces])


def build_url(
    config: ClientConfig,
    path: str,
    options: Optional[RequestOptions] = None,
) -> Tuple[str, QueryParameters]:
    """
    Compose the request URL and the query mapping it was built from.

    Identical inputs always produce byte-identical URLs.
    """
    query = build_query(config, options)
    url = f"{build_path(config, path)}?{serialize(query)}"
    return url, query


def prepare_request(
    config: ClientConfig,
    path: str,
    options: Optional[RequestOptions] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> PreparedRequest:
    url, query = build_url(config, path, options)
    logger.debug("Prepared GET %s", url)
    return PreparedRequest(
        url=url,
        query=query,
        headers=dict(headers or {}),
        tree_fields=tree_fields(options),
    )


__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_PAGE",
    "RESERVED_OPTIONS",
    "PreparedRequest",
    "RequestOptions",
    "QueryParameters",
    "build_query",
    "build_path",
    "build_url",
    "prepare_request",
    "quote_segment",
    "serialize",
    "deserialize",
    "tree_fields",
]

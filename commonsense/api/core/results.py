"""
Response mapping
================

Classifies a completed HTTP exchange into a result value.

    200            → Success(200, parsed JSON), term trees assembled on request
    400 / 401 / 404 → Failure(BAD_REQUEST / UNAUTHORIZED / NOT_FOUND, status text)
    anything else  → Failure(UNKNOWN, "An error has occurred (error code: N)")
    bad JSON on 200 → Failure(PARSE_ERROR, ...)
    no status      → Failure(NETWORK_ERROR, ...)  (see `network_failure`)

API failures are values, never exceptions; the caller decides whether to
retry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
import json
import logging
from typing import Any, Callable, Dict, Optional, Sequence, Union

from commonsense.api.core.query import PreparedRequest
from commonsense.api.core.term_tree import apply_term_trees

logger = logging.getLogger(__name__)

JSON = Dict[str, Any]

DEBUG_PAYLOAD: JSON = {"success": 1}


class FailureKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    UNKNOWN = "unknown"
    PARSE_ERROR = "parse_error"
    NETWORK_ERROR = "network_error"


_STATUS_KINDS = {
    401: FailureKind.UNAUTHORIZED,
    404: FailureKind.NOT_FOUND,
    400: FailureKind.BAD_REQUEST,
}


@dataclass(frozen=True)
class Success:
    status_code: int
    payload: Any
    request: Optional[PreparedRequest] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """
    A request that did not produce a usable payload.

    ``status_code`` is None for network errors, where no status was received.
    """

    kind: FailureKind
    message: str
    status_code: Optional[int] = None
    request: Optional[PreparedRequest] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return False


ApiResult = Union[Success, Failure]
ResultCallback = Callable[[Optional[Failure], Any], None]


def _reason(status_code: int, reason: Optional[str]) -> str:
    if reason:
        return reason
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return str(status_code)


def interpret(
    status_code: int,
    body: str,
    tree_fields: Optional[Sequence[str]] = None,
    reason: Optional[str] = None,
    request: Optional[PreparedRequest] = None,
) -> ApiResult:
    """
    Map a status code and body to a `Success` or `Failure`.

    Args:
        status_code: HTTP status of the exchange.
        body: Raw response body.
        tree_fields: Response fields to assemble into term trees (200 only).
        reason: Server status text; defaults to the standard phrase.
        request: The request that produced this response, attached to the result.
    """
    if status_code == 200:
        try:
            payload = json.loads(body)
        except ValueError as exc:
            msg = getattr(exc, "msg", str(exc))
            return Failure(
                FailureKind.PARSE_ERROR,
                f"Failed to decode JSON response: {msg}",
                status_code=status_code,
                request=request,
            )
        if tree_fields:
            payload = apply_term_trees(payload, tree_fields)
        return Success(status_code, payload, request=request)

    kind = _STATUS_KINDS.get(status_code)
    if kind is not None:
        return Failure(kind, _reason(status_code, reason), status_code=status_code, request=request)

    return Failure(
        FailureKind.UNKNOWN,
        f"An error has occurred (error code: {status_code})",
        status_code=status_code,
        request=request,
    )


def network_failure(exc: BaseException, request: Optional[PreparedRequest] = None) -> Failure:
    """Wrap a transport failure that happened before any status was received."""
    return Failure(FailureKind.NETWORK_ERROR, str(exc), request=request)


def debug_result(request: Optional[PreparedRequest] = None) -> Success:
    """Fixed result returned in debug mode, where nothing is sent."""
    return Success(200, dict(DEBUG_PAYLOAD), request=request)


def deliver(result: ApiResult, callback: Optional[ResultCallback] = None) -> ApiResult:
    """
    Hand ``result`` to an err-first callback, if any, and return it.

    The callback receives ``(failure, None)`` or ``(None, payload)``.
    """
    if callback is not None:
        if isinstance(result, Failure):
            callback(result, None)
        else:
            callback(None, result.payload)
    return result


__all__ = [
    "ApiResult",
    "DEBUG_PAYLOAD",
    "Failure",
    "FailureKind",
    "ResultCallback",
    "Success",
    "debug_result",
    "deliver",
    "interpret",
    "network_failure",
]

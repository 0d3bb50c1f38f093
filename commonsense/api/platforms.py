"""
Platforms
=========

Each platform shares the same request protocol but exposes its own content
catalog. Instead of one client subclass per platform, a client holds a
`PlatformProfile` describing what the platform offers.

Content types
-------------
education → products, blogs, app_flows, lists, user_reviews, boards, schools
global    → products, blogs, app_flows, lists, user_reviews, boards, users
media     → (no typed catalog yet; generic calls still work)

Convenience names
-----------------
For each content type a profile maps two names to an operation, e.g. for
``user_reviews``:

    get_user_reviews_list / getUserReviewsList → ("user_reviews", "list")
    get_user_reviews_item / getUserReviewsItem → ("user_reviews", "item")
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Dict, Tuple, Union

from commonsense.api.core.config import Platform

LIST = "list"
ITEM = "item"


class UnsupportedOperationError(ValueError):
    """Raised when an operation is not offered by the client's platform."""


def camel_case(name: str) -> str:
    """
    Convert an underscored name to camel case.

        camel_case("FOO_BAR") == "fooBar"
        camel_case("user_reviews") == "userReviews"
    """
    return re.sub(r"_(.)", lambda m: m.group(1).upper(), name.lower())


def _wrapper_names(content_type: str, operation: str) -> Tuple[str, str]:
    camel = camel_case(content_type)
    return (
        f"get_{content_type.lower()}_{operation}",
        f"get{camel[:1].upper()}{camel[1:]}{operation.capitalize()}",
    )


@dataclass(frozen=True)
class PlatformProfile:
    platform: Platform
    content_types: Tuple[str, ...]
    supports_search: bool = False
    supports_terms: bool = False

    def has_type(self, content_type: str) -> bool:
        return content_type in self.content_types

    def require(self, operation: str) -> None:
        supported = {
            "search": self.supports_search,
            "terms": self.supports_terms,
        }.get(operation, True)
        if not supported:
            raise UnsupportedOperationError(
                f"The '{self.platform.value}' platform does not support {operation}."
            )

    def wrapper_table(self) -> Dict[str, Tuple[str, str]]:
        """
        Map every convenience name to ``(content_type, "list" | "item")``.
        """
        table: Dict[str, Tuple[str, str]] = {}
        for content_type in self.content_types:
            for operation in (LIST, ITEM):
                for name in _wrapper_names(content_type, operation):
                    table[name] = (content_type, operation)
        return table


EDUCATION = PlatformProfile(
    platform=Platform.EDUCATION,
    content_types=(
        "products",
        "blogs",
        "app_flows",
        "lists",
        "user_reviews",
        "boards",
        "schools",
    ),
    supports_search=True,
    supports_terms=True,
)

MEDIA = PlatformProfile(platform=Platform.MEDIA, content_types=())

GLOBAL = PlatformProfile(
    platform=Platform.GLOBAL,
    content_types=(
        "products",
        "blogs",
        "app_flows",
        "lists",
        "user_reviews",
        "boards",
        "users",
    ),
)

_PROFILES: Dict[Platform, PlatformProfile] = {
    Platform.EDUCATION: EDUCATION,
    Platform.MEDIA: MEDIA,
    Platform.GLOBAL: GLOBAL,
}


def profile_for(platform: Union[str, Platform]) -> PlatformProfile:
    return _PROFILES[Platform.parse(platform)]


__all__ = [
    "EDUCATION",
    "GLOBAL",
    "MEDIA",
    "PlatformProfile",
    "UnsupportedOperationError",
    "camel_case",
    "profile_for",
]

"""Route-pattern matching for intercepted storefront API calls.

Each ``RouteKind`` owns one path shape built from exact segments and ``{id}``
numeric wildcards. A URL is matched by its trailing path segments, so the
storefront may live under any origin or path prefix. Patterns are tried from
most to least specific and the first match wins.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple
from urllib.parse import urlsplit

ID_WILDCARD = "{id}"
_NUMERIC_ID = re.compile(r"\d+")


class RouteKind(Enum):
    AUTH = "auth"
    CURRENT_USER = "current_user"
    MENU = "menu"
    FRANCHISE_LIST = "franchise_list"
    FRANCHISE_BY_ID = "franchise_by_id"
    STORE_CREATE = "store_create"
    STORE_DELETE = "store_delete"
    ORDER = "order"
    ORDER_VERIFY = "order_verify"
    DOCS = "docs"


@dataclass(frozen=True)
class RoutePattern:
    kind: RouteKind
    path: str
    allows_query: bool = False

    @property
    def segments(self) -> Tuple[str, ...]:
        return tuple(segment for segment in self.path.split("/") if segment)

    @property
    def specificity(self) -> Tuple[int, int]:
        """Longer patterns first, then patterns with more exact segments."""
        segments = self.segments
        literal = sum(1 for segment in segments if segment != ID_WILDCARD)
        return (len(segments), literal)

    def matches(self, path_segments: List[str], query: str) -> bool:
        if query and not self.allows_query:
            return False
        pattern = self.segments
        if len(path_segments) < len(pattern):
            return False
        tail = path_segments[len(path_segments) - len(pattern):]
        for expected, actual in zip(pattern, tail):
            if expected == ID_WILDCARD:
                if not _NUMERIC_ID.fullmatch(actual):
                    return False
            elif expected != actual:
                return False
        return True


ROUTE_PATTERNS: Tuple[RoutePattern, ...] = (
    RoutePattern(RouteKind.AUTH, "/api/auth"),
    RoutePattern(RouteKind.CURRENT_USER, "/api/user/me"),
    RoutePattern(RouteKind.MENU, "/api/order/menu"),
    RoutePattern(RouteKind.FRANCHISE_LIST, "/api/franchise", allows_query=True),
    RoutePattern(RouteKind.FRANCHISE_BY_ID, "/api/franchise/{id}"),
    RoutePattern(RouteKind.STORE_CREATE, "/api/franchise/{id}/store"),
    RoutePattern(RouteKind.STORE_DELETE, "/api/franchise/{id}/store/{id}"),
    RoutePattern(RouteKind.ORDER, "/api/order"),
    RoutePattern(RouteKind.ORDER_VERIFY, "/api/order/verify"),
    RoutePattern(RouteKind.DOCS, "/api/docs"),
)

# Most specific first; sorted() is stable so declaration order breaks ties.
_BY_SPECIFICITY: Tuple[RoutePattern, ...] = tuple(
    sorted(ROUTE_PATTERNS, key=lambda pattern: pattern.specificity, reverse=True)
)


def pattern_for(kind: RouteKind) -> RoutePattern:
    for pattern in ROUTE_PATTERNS:
        if pattern.kind is kind:
            return pattern
    raise KeyError(kind)


def match_route(url: str) -> Optional[RouteKind]:
    """Return the category for a full URL or bare path, or None if unmatched."""
    parts = urlsplit(url)
    path_segments = [segment for segment in parts.path.split("/") if segment]
    for pattern in _BY_SPECIFICITY:
        if pattern.matches(path_segments, parts.query):
            return pattern.kind
    return None


def url_predicate(kind: RouteKind) -> Callable[[str], bool]:
    """URL matcher for ``page.route`` that accepts only URLs of ``kind``."""

    def _predicate(url: str) -> bool:
        return match_route(url) is kind

    _predicate.__name__ = f"match_{kind.value}"
    return _predicate

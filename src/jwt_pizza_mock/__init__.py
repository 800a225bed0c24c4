"""Request-mocking fixture layer for the JWT Pizza storefront E2E suite."""
from jwt_pizza_mock.fixtures import (
    Franchise,
    Identity,
    MenuItem,
    Role,
    Store,
    TEST_USERS,
    find_identity,
    find_identity_by_credentials,
)
from jwt_pizza_mock.router import InterceptionRouter, MockResponse
from jwt_pizza_mock.routes import RouteKind, match_route

__all__ = [
    "Franchise",
    "Identity",
    "InterceptionRouter",
    "MenuItem",
    "MockResponse",
    "Role",
    "RouteKind",
    "Store",
    "TEST_USERS",
    "find_identity",
    "find_identity_by_credentials",
    "match_route",
]

__version__ = "1.0.0"

"""Interception router: answers storefront API calls from fixtures.

One ``InterceptionRouter`` belongs to one browsing session. It holds the only
mutable state in the mock layer, the currently authenticated identity, and
answers each call synchronously in the order it arrives.

Usage:
    router = InterceptionRouter()
    response = router.handle("PUT", "/api/auth", {"email": "d@jwt.com", "password": "diner"})
    assert response.status == 200
    assert router.session.name == "Kai Chen"
"""
from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from jwt_pizza_mock.exceptions import PayloadDecodeError
from jwt_pizza_mock.fixtures import (
    Identity,
    Role,
    RoleAssignment,
    all_franchises,
    all_menu_items,
    find_identity_by_credentials,
    franchises_owned_by,
)
from jwt_pizza_mock.order_token import ORDER_JWT, verify_payload
from jwt_pizza_mock.routes import RouteKind, match_route

logger = logging.getLogger(__name__)

AUTH_TOKEN = "test-token"
SYNTHESIZED_ID = 10
SUBMITTED_ORDER_ID = 100
SYNTHESIZED_ADMIN_NAME = "Test User"
STORE_FRANCHISE_ID = 1
API_VERSION = "1.0.0"

HISTORY_ORDER: Dict[str, Any] = {
    "id": 1,
    "franchiseId": 1,
    "storeId": 1,
    "date": "2024-06-05T05:14:40.000Z",
    "items": [{"id": 1, "menuId": 1, "description": "Veggie", "price": 0.0038}],
}

DOCS_ENDPOINTS = (
    {"method": "POST", "path": "/api/auth", "description": "Register a new user", "requiresAuth": False},
    {"method": "PUT", "path": "/api/auth", "description": "Login existing user", "requiresAuth": False},
    {"method": "DELETE", "path": "/api/auth", "description": "Logout a user", "requiresAuth": True},
)


@dataclass
class MockResponse:
    """Status code and JSON body for one intercepted call."""

    body: Any = field(default_factory=dict)
    status: int = 200


Handler = Callable[[str, Any], Optional[MockResponse]]


def parse_payload(raw: str | bytes | None) -> Any:
    """Decode a request body; an empty body is treated as ``{}``."""
    if raw is None:
        return {}
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PayloadDecodeError(raw, str(exc)) from exc


def _field(payload: Any, key: str) -> Any:
    if isinstance(payload, dict):
        return payload.get(key)
    return None


class InterceptionRouter:
    """Answers intercepted calls for one simulated browsing session."""

    def __init__(self, logged_in_user: Identity | None = None) -> None:
        self.session: Identity | None = logged_in_user
        self._handlers: Dict[RouteKind, Handler] = {
            RouteKind.AUTH: self._auth,
            RouteKind.CURRENT_USER: self._current_user,
            RouteKind.MENU: self._menu,
            RouteKind.FRANCHISE_LIST: self._franchise_list,
            RouteKind.FRANCHISE_BY_ID: self._franchise_by_id,
            RouteKind.STORE_CREATE: self._store_create,
            RouteKind.STORE_DELETE: self._store_delete,
            RouteKind.ORDER: self._order,
            RouteKind.ORDER_VERIFY: self._order_verify,
            RouteKind.DOCS: self._docs,
        }

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    def handle(self, method: str, url: str, payload: Any = None) -> MockResponse | None:
        """Match ``url`` and dispatch; None means the call is left unhandled."""
        kind = match_route(url)
        if kind is None:
            logger.debug(f"No mock route for {method} {url}")
            return None
        return self.dispatch(kind, method, payload)

    def dispatch(self, kind: RouteKind, method: str, payload: Any = None) -> MockResponse | None:
        method = method.upper()
        response = self._handlers[kind](method, payload)
        if response is None:
            logger.debug(f"{kind.value}: method {method} is not mocked")
        else:
            logger.debug(f"{kind.value}: {method} -> {response.status}")
        return response

    # ---- session transitions ---------------------------------------------------
    def _set_session(self, identity: Identity | None, reason: str) -> None:
        previous = self.session.email if self.session else None
        self.session = identity
        current = identity.email if identity else None
        logger.info(f"Session {reason}: {previous} -> {current}")

    # ---- handlers --------------------------------------------------------------
    def _auth(self, method: str, payload: Any) -> MockResponse | None:
        if method == "POST":
            identity = Identity(
                id=SYNTHESIZED_ID,
                name=_field(payload, "name"),
                email=_field(payload, "email"),
                password=_field(payload, "password"),
                roles=(RoleAssignment(Role.DINER),),
            )
            self._set_session(identity, "registered")
            return MockResponse({"user": identity.public(), "token": AUTH_TOKEN})
        if method == "PUT":
            identity = find_identity_by_credentials(_field(payload, "email"), _field(payload, "password"))
            if identity is None:
                logger.info(f"Login rejected for {_field(payload, 'email')}")
                return MockResponse({"message": "unknown user"}, status=404)
            self._set_session(identity, "logged in")
            return MockResponse({"user": identity.public(), "token": AUTH_TOKEN})
        if method == "DELETE":
            self._set_session(None, "logged out")
            return MockResponse({"message": "logout successful"})
        return None

    def _current_user(self, method: str, payload: Any) -> MockResponse | None:
        if self.session is None:
            return MockResponse({"message": "unauthorized"}, status=401)
        return MockResponse(self.session.public())

    def _menu(self, method: str, payload: Any) -> MockResponse | None:
        return MockResponse([item.to_json() for item in all_menu_items()])

    def _franchise_list(self, method: str, payload: Any) -> MockResponse | None:
        if method == "GET":
            return MockResponse({
                "franchises": [franchise.to_json() for franchise in all_franchises()],
                "more": False,
            })
        if method == "POST":
            admins = _field(payload, "admins")
            if not isinstance(admins, list):
                admins = []
            return MockResponse({
                "id": SYNTHESIZED_ID,
                "name": _field(payload, "name"),
                "admins": [
                    {**admin, "id": SYNTHESIZED_ID, "name": SYNTHESIZED_ADMIN_NAME}
                    for admin in admins
                    if isinstance(admin, dict)
                ],
                "stores": [],
            })
        return None

    def _franchise_by_id(self, method: str, payload: Any) -> MockResponse | None:
        if method == "GET":
            owned = franchises_owned_by(self.session)
            return MockResponse([franchise.to_json() for franchise in owned])
        if method == "DELETE":
            return MockResponse({"message": "franchise deleted"})
        return None

    def _store_create(self, method: str, payload: Any) -> MockResponse | None:
        return MockResponse({
            "id": SYNTHESIZED_ID,
            "franchiseId": STORE_FRANCHISE_ID,
            "name": _field(payload, "name"),
            "totalRevenue": 0,
        })

    def _store_delete(self, method: str, payload: Any) -> MockResponse | None:
        return MockResponse({"message": "store deleted"})

    def _order(self, method: str, payload: Any) -> MockResponse | None:
        if method == "GET":
            return MockResponse({
                "dinerId": self.session.id if self.session else 0,
                "orders": [copy.deepcopy(HISTORY_ORDER)],
                "page": 1,
            })
        if method == "POST":
            order = dict(payload) if isinstance(payload, dict) else {}
            order["id"] = SUBMITTED_ORDER_ID
            return MockResponse({"order": order, "jwt": ORDER_JWT})
        return None

    def _order_verify(self, method: str, payload: Any) -> MockResponse | None:
        # The presented token is ignored; the verdict is always "valid".
        return MockResponse({"message": "valid", "payload": verify_payload()})

    def _docs(self, method: str, payload: Any) -> MockResponse | None:
        return MockResponse({
            "version": API_VERSION,
            "endpoints": [dict(endpoint) for endpoint in DOCS_ENDPOINTS],
        })

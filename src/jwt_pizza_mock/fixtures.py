"""Static reference data for the mocked JWT Pizza backend.

Users, menu and franchise catalog are immutable module-level constants. Lookups
never mutate them, so every router instance sees the same starting point.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Role(str, Enum):
    """Role kinds as they appear on the wire."""

    DINER = "diner"
    FRANCHISEE = "franchisee"
    ADMIN = "admin"


@dataclass(frozen=True)
class RoleAssignment:
    role: Role
    object_id: Optional[int] = None

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"role": self.role.value}
        if self.object_id is not None:
            data["objectId"] = self.object_id
        return data


@dataclass(frozen=True)
class Identity:
    """A simulated account with credentials and role assignments."""

    id: int
    name: str
    email: str
    password: str
    roles: Tuple[RoleAssignment, ...] = field(default_factory=tuple)

    def has_role(self, role: Role) -> bool:
        return any(assignment.role == role for assignment in self.roles)

    def public(self) -> Dict[str, Any]:
        """Fields the backend exposes about a user (never the password)."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "roles": [assignment.to_json() for assignment in self.roles],
        }


@dataclass(frozen=True)
class MenuItem:
    id: int
    title: str
    image: str
    price: float
    description: str

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "image": self.image,
            "price": self.price,
            "description": self.description,
        }


@dataclass(frozen=True)
class FranchiseAdmin:
    id: int
    name: str
    email: str

    def to_json(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}


@dataclass(frozen=True)
class Store:
    id: int
    name: str
    total_revenue: float

    def to_json(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "totalRevenue": self.total_revenue}


@dataclass(frozen=True)
class Franchise:
    id: int
    name: str
    admins: Tuple[FranchiseAdmin, ...]
    stores: Tuple[Store, ...]

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "admins": [admin.to_json() for admin in self.admins],
            "stores": [store.to_json() for store in self.stores],
        }


TEST_USERS: Dict[str, Identity] = {
    "diner": Identity(
        id=3,
        name="Kai Chen",
        email="d@jwt.com",
        password="diner",
        roles=(RoleAssignment(Role.DINER),),
    ),
    "franchisee": Identity(
        id=4,
        name="pizza franchisee",
        email="f@jwt.com",
        password="franchisee",
        roles=(RoleAssignment(Role.DINER), RoleAssignment(Role.FRANCHISEE, object_id=1)),
    ),
    "admin": Identity(
        id=1,
        name="常用名字",
        email="a@jwt.com",
        password="admin",
        roles=(RoleAssignment(Role.ADMIN),),
    ),
}

MENU_ITEMS: Tuple[MenuItem, ...] = (
    MenuItem(1, "Veggie", "pizza1.png", 0.0038, "A garden of delight"),
    MenuItem(2, "Pepperoni", "pizza2.png", 0.0042, "Spicy treat"),
    MenuItem(3, "Margarita", "pizza3.png", 0.0014, "Essential classic"),
    MenuItem(4, "Crusty", "pizza4.png", 0.0024, "A dry mouthed favorite"),
)

FRANCHISES: Tuple[Franchise, ...] = (
    Franchise(
        id=1,
        name="pizzaPocket",
        admins=(FranchiseAdmin(4, "pizza franchisee", "f@jwt.com"),),
        stores=(Store(1, "SLC", 0.5), Store(2, "Provo", 0.3)),
    ),
    Franchise(
        id=2,
        name="LotaPizza",
        admins=(FranchiseAdmin(5, "John Doe", "j@jwt.com"),),
        stores=(Store(3, "Lehi", 0.2),),
    ),
)


def find_identity_by_credentials(email: str | None, password: str | None) -> Identity | None:
    """Return the fixture user matching both email and password, else None."""
    for identity in TEST_USERS.values():
        if identity.email == email and identity.password == password:
            return identity
    return None


def find_identity(key: str) -> Identity:
    """Look up a fixture user by its key (``diner``, ``franchisee``, ``admin``)."""
    try:
        return TEST_USERS[key]
    except KeyError:
        raise KeyError(f"unknown test user '{key}' (expected one of {sorted(TEST_USERS)})") from None


def all_menu_items() -> List[MenuItem]:
    return list(MENU_ITEMS)


def all_franchises() -> List[Franchise]:
    return list(FRANCHISES)


def franchises_owned_by(identity: Identity | None) -> List[Franchise]:
    """Franchises scoped by the identity's franchisee role assignments."""
    if identity is None:
        return []
    owned_ids = [
        assignment.object_id
        for assignment in identity.roles
        if assignment.role == Role.FRANCHISEE and assignment.object_id is not None
    ]
    return [franchise for franchise in FRANCHISES if franchise.id in owned_ids]

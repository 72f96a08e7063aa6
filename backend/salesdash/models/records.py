"""
Typed records for the two persisted collections.

The serialized form uses the camelCase keys of the stored JSON
(isPaid, userId, createdAt); attributes are snake_case.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from salesdash.time_utils import parse_iso_datetime, to_utc_z, utcnow
from salesdash.validation import InvalidInput, coerce_price, coerce_quantity, require_text


ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLES = (ROLE_ADMIN, ROLE_USER)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


def now_stamp() -> str:
    return to_utc_z(utcnow())


@dataclass
class User:
    id: str
    username: str
    password: str
    role: str
    created_at: str = field(default_factory=now_stamp)

    def __post_init__(self):
        self.id = require_text(self.id, "id")
        if not isinstance(self.username, str) or not self.username:
            raise InvalidInput("username is required", details={"field": "username"})
        if not isinstance(self.password, str) or not self.password:
            raise InvalidInput("password is required", details={"field": "password"})
        if self.role not in ROLES:
            raise InvalidInput(
                f"role must be one of: {', '.join(ROLES)}",
                details={"field": "role"},
            )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "password": self.password,
            "role": self.role,
            "createdAt": self.created_at,
        }

    def to_public_dict(self) -> dict:
        """Same as to_dict without the password, for API responses."""
        data = self.to_dict()
        data.pop("password")
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=data.get("id"),
            username=data.get("username"),
            password=data.get("password"),
            role=data.get("role"),
            created_at=data.get("createdAt") or now_stamp(),
        )


@dataclass
class Sale:
    """
    One recorded transaction line.

    is_paid is the only field that changes after creation.
    """
    id: str
    name: str
    item: str
    quantity: int
    price: float
    is_paid: bool
    user_id: str
    username: str
    timestamp: str = field(default_factory=now_stamp)

    def __post_init__(self):
        self.id = require_text(self.id, "id")
        self.name = require_text(self.name, "name")
        self.item = require_text(self.item, "item")
        self.quantity = coerce_quantity(self.quantity)
        self.price = coerce_price(self.price)
        self.is_paid = bool(self.is_paid)
        self.user_id = require_text(self.user_id, "userId")
        self.username = require_text(self.username, "username")
        self.timestamp = require_text(self.timestamp, "timestamp")
        try:
            parse_iso_datetime(self.timestamp)
        except ValueError:
            raise InvalidInput("timestamp must be an ISO-8601 datetime", details={"field": "timestamp"})

    @property
    def amount(self) -> float:
        return self.quantity * self.price

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "item": self.item,
            "quantity": self.quantity,
            "price": self.price,
            "isPaid": self.is_paid,
            "userId": self.user_id,
            "username": self.username,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Sale":
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            item=data.get("item"),
            quantity=data.get("quantity"),
            price=data.get("price"),
            is_paid=data.get("isPaid", False),
            user_id=data.get("userId"),
            username=data.get("username"),
            timestamp=data.get("timestamp") or now_stamp(),
        )

"""Entities: User, Product, Order, Review as immutable values.

Invariants:
    - Entities are frozen; every change builds a new value via dataclasses.replace
    - Relationships are ids only (no object references between entities)
    - Product.status and Product.updated_at change together in one new value
    - Order.seller_id and Order.price are copies taken at order creation
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal

from market.core.domain_types import (
    UserId, ProductId, OrderId, ReviewId,
    UserRole, ProductStatus, OrderStatus,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class User:
    id: UserId
    username: str
    password_hash: str
    role: UserRole
    email: str | None = None
    phone: str | None = None
    banned: bool = False
    created_at: datetime = field(default_factory=utcnow)

    def with_banned(self, banned: bool) -> "User":
        return replace(self, banned=banned)


@dataclass(frozen=True)
class Product:
    id: ProductId
    name: str
    description: str
    category: str
    price: Decimal
    seller_id: UserId
    status: ProductStatus = ProductStatus.AVAILABLE
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def with_status(self, status: ProductStatus) -> "Product":
        """New value with status and updated_at bumped together."""
        return replace(self, status=status, updated_at=utcnow())

    def with_fields(self, **changes: object) -> "Product":
        """New value with edited fields; seller_id and status are not editable."""
        changes.pop("seller_id", None)
        changes.pop("status", None)
        return replace(self, **changes, updated_at=utcnow())


@dataclass(frozen=True)
class Order:
    id: OrderId
    product_id: ProductId
    buyer_id: UserId
    seller_id: UserId
    price: Decimal
    status: OrderStatus = OrderStatus.PENDING_SHIP
    created_at: datetime = field(default_factory=utcnow)
    shipped_at: datetime | None = None
    received_at: datetime | None = None

    def shipped(self) -> "Order":
        return replace(self, status=OrderStatus.SHIPPED, shipped_at=utcnow())

    def completed(self) -> "Order":
        return replace(self, status=OrderStatus.COMPLETED, received_at=utcnow())


@dataclass(frozen=True)
class Review:
    id: ReviewId
    order_id: OrderId
    product_id: ProductId
    buyer_id: UserId
    seller_id: UserId
    rating: int
    comment: str
    created_at: datetime = field(default_factory=utcnow)

    @property
    def stars(self) -> str:
        return "★" * self.rating + "☆" * (5 - self.rating)

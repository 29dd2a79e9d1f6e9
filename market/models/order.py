"""OrderRow ORM: persisted form of core.entities.Order.

Invariants:
    - seller_id and price are the copies taken at order creation
    - shipped_at / received_at stay NULL until those states are reached
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from market.core.domain_types import OrderId, ProductId, UserId, OrderStatus
from market.core.entities import Order
from market.db.base import Base
from market.models.columns import DecimalText, UTCDateTime


class OrderRow(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    product_id: Mapped[str] = mapped_column(String(32), nullable=False)
    buyer_id: Mapped[str] = mapped_column(String(32), nullable=False)
    seller_id: Mapped[str] = mapped_column(String(32), nullable=False)
    price: Mapped[Decimal] = mapped_column(DecimalText, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    shipped_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    received_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    @classmethod
    def from_entity(cls, order: Order) -> "OrderRow":
        return cls(
            id=order.id, product_id=order.product_id, buyer_id=order.buyer_id,
            seller_id=order.seller_id, price=order.price,
            status=order.status.value, created_at=order.created_at,
            shipped_at=order.shipped_at, received_at=order.received_at,
        )

    def to_entity(self) -> Order:
        return Order(
            id=OrderId(self.id), product_id=ProductId(self.product_id),
            buyer_id=UserId(self.buyer_id), seller_id=UserId(self.seller_id),
            price=self.price, status=OrderStatus(self.status),
            created_at=self.created_at, shipped_at=self.shipped_at,
            received_at=self.received_at,
        )

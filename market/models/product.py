"""ProductRow ORM: persisted form of core.entities.Product.

Invariants:
    - price stored as exact decimal text
    - status stored as the ProductStatus value
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from market.core.domain_types import ProductId, UserId, ProductStatus
from market.core.entities import Product
from market.db.base import Base
from market.models.columns import DecimalText, UTCDateTime


class ProductRow(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[Decimal] = mapped_column(DecimalText, nullable=False)
    seller_id: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    @classmethod
    def from_entity(cls, product: Product) -> "ProductRow":
        return cls(
            id=product.id, name=product.name, description=product.description,
            category=product.category, price=product.price,
            seller_id=product.seller_id, status=product.status.value,
            created_at=product.created_at, updated_at=product.updated_at,
        )

    def to_entity(self) -> Product:
        return Product(
            id=ProductId(self.id), name=self.name, description=self.description,
            category=self.category, price=self.price,
            seller_id=UserId(self.seller_id), status=ProductStatus(self.status),
            created_at=self.created_at, updated_at=self.updated_at,
        )

"""ReviewRow ORM: persisted form of core.entities.Review.

Invariants:
    - order_id is unique (at most one review per order)
"""

from datetime import datetime

from sqlalchemy import String, Text, Integer
from sqlalchemy.orm import Mapped, mapped_column

from market.core.domain_types import ReviewId, OrderId, ProductId, UserId
from market.core.entities import Review
from market.db.base import Base
from market.models.columns import UTCDateTime


class ReviewRow(Base):
    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    order_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    product_id: Mapped[str] = mapped_column(String(32), nullable=False)
    buyer_id: Mapped[str] = mapped_column(String(32), nullable=False)
    seller_id: Mapped[str] = mapped_column(String(32), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    @classmethod
    def from_entity(cls, review: Review) -> "ReviewRow":
        return cls(
            id=review.id, order_id=review.order_id, product_id=review.product_id,
            buyer_id=review.buyer_id, seller_id=review.seller_id,
            rating=review.rating, comment=review.comment,
            created_at=review.created_at,
        )

    def to_entity(self) -> Review:
        return Review(
            id=ReviewId(self.id), order_id=OrderId(self.order_id),
            product_id=ProductId(self.product_id), buyer_id=UserId(self.buyer_id),
            seller_id=UserId(self.seller_id), rating=self.rating,
            comment=self.comment, created_at=self.created_at,
        )

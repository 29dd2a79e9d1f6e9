"""Lifecycle Engine: Product and Order state machines plus review submission.

Invariants:
    - Every precondition is checked before the first store write (all or nothing)
    - Each transition saves a fully built new value (status + timestamp together)
    - Events are published strictly after the store writes they describe
    - Placing an order reserves the product; confirming receipt sells it
    - At most one review per order, checked before insert

Design Decisions:
    - Checks live in enforce_transitions.py as pure functions; this module only
      looks entities up, raises the first error and applies the change
"""

import logging
from decimal import Decimal

from market.core.collaborator_protocols import IdGenerator
from market.core.domain_types import (
    UserId, ProductId, OrderId, ReviewId, ProductStatus, OrderStatus,
    PRODUCT_ID_PREFIX, ORDER_ID_PREFIX, REVIEW_ID_PREFIX,
)
from market.core.enforce_transitions import (
    check_product_transition, check_order_transition, check_product_editable,
    check_product_owner, check_order_seller, check_order_buyer,
    validate_order_placement, validate_review_submission,
)
from market.core.entities import User, Product, Order, Review
from market.core.entity_store import MarketRepository
from market.core.errors import NotFoundError
from market.core.event_channel import (
    EventChannel, OrderStatusChanged, ProductStatusChanged,
)

logger = logging.getLogger(__name__)


def _raise_if(error: Exception | None) -> None:
    if error is not None:
        raise error


class LifecycleEngine:
    """Validates and applies Product/Order transitions and emits their events."""

    def __init__(
        self, repository: MarketRepository, events: EventChannel, ids: IdGenerator,
    ):
        self.repository = repository
        self.events = events
        self.ids = ids

    # --- lookups ---------------------------------------------------------------

    def require_product(self, product_id: str) -> Product:
        product = self.repository.products.find_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    def require_order(self, order_id: str) -> Order:
        order = self.repository.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    # --- product state machine -------------------------------------------------

    def list_product(
        self, seller: User, name: str, description: str, category: str,
        price: Decimal,
    ) -> Product:
        product = Product(
            id=ProductId(self.ids.new_id(PRODUCT_ID_PREFIX)),
            name=name,
            description=description,
            category=category,
            price=price,
            seller_id=seller.id,
        )
        self.repository.products.save(product)
        logger.info(
            f"Product listed: {product.name}",
            extra={"product_id": product.id, "user_id": seller.id},
        )
        return product

    def editable_product(self, actor_id: UserId, product_id: str) -> Product:
        """Product the actor may edit right now (owner, still Available)."""
        product = self.require_product(product_id)
        _raise_if(
            check_product_owner(product, actor_id)
            or check_product_editable(product)
        )
        return product

    def edit_product(
        self, actor_id: UserId, product_id: str, **changes: object,
    ) -> Product:
        product = self.editable_product(actor_id, product_id)
        edits = {k: v for k, v in changes.items() if v is not None}
        if not edits:
            return product
        updated = product.with_fields(**edits)
        self.repository.products.save(updated)
        return updated

    def retire_product(self, actor_id: UserId, product_id: str) -> Product:
        product = self.require_product(product_id)
        _raise_if(
            check_product_owner(product, actor_id)
            or check_product_transition(product, ProductStatus.REMOVED)
        )
        return self._apply_product_status(product, ProductStatus.REMOVED)

    def _apply_product_status(
        self, product: Product, target: ProductStatus,
    ) -> Product:
        updated = product.with_status(target)
        self.repository.products.save(updated)
        self.events.publish(ProductStatusChanged(updated, product.status, target))
        return updated

    # --- order state machine ---------------------------------------------------

    def place_order(self, buyer: User, product_id: str) -> Order:
        product = self.require_product(product_id)
        _raise_if(
            validate_order_placement(product, buyer.id)
            or check_product_transition(product, ProductStatus.PENDING)
        )
        order = Order(
            id=OrderId(self.ids.new_id(ORDER_ID_PREFIX)),
            product_id=product.id,
            buyer_id=buyer.id,
            seller_id=product.seller_id,
            price=product.price,
        )
        reserved = product.with_status(ProductStatus.PENDING)
        self.repository.orders.save(order)
        self.repository.products.save(reserved)
        logger.info(
            "Order placed",
            extra={"order_id": order.id, "product_id": product.id, "user_id": buyer.id},
        )
        self.events.publish(
            ProductStatusChanged(reserved, product.status, ProductStatus.PENDING),
        )
        self.events.publish(
            OrderStatusChanged(order, None, OrderStatus.PENDING_SHIP),
        )
        return order

    def ship_order(self, actor_id: UserId, order_id: str) -> Order:
        order = self.require_order(order_id)
        _raise_if(
            check_order_seller(order, actor_id)
            or check_order_transition(order, OrderStatus.SHIPPED)
        )
        shipped = order.shipped()
        self.repository.orders.save(shipped)
        self.events.publish(
            OrderStatusChanged(shipped, order.status, OrderStatus.SHIPPED),
        )
        return shipped

    def confirm_receipt(self, actor_id: UserId, order_id: str) -> Order:
        order = self.require_order(order_id)
        _raise_if(
            check_order_buyer(order, actor_id)
            or check_order_transition(order, OrderStatus.COMPLETED)
        )
        product = self.repository.products.find_by_id(order.product_id)
        if product is not None:
            _raise_if(check_product_transition(product, ProductStatus.SOLD))

        completed = order.completed()
        self.repository.orders.save(completed)
        if product is None:
            logger.warning(
                "Completed order references a missing product",
                extra={"order_id": order.id, "product_id": order.product_id},
            )
        else:
            self._apply_product_status(product, ProductStatus.SOLD)
        self.events.publish(
            OrderStatusChanged(completed, order.status, OrderStatus.COMPLETED),
        )
        return completed

    # --- reviews ---------------------------------------------------------------

    def submit_review(
        self, actor_id: UserId, order_id: str, rating: int, comment: str,
    ) -> Review:
        order = self.require_order(order_id)
        existing = self.repository.reviews.find_by(lambda r: r.order_id == order.id)
        _raise_if(validate_review_submission(order, actor_id, rating, existing))
        review = Review(
            id=ReviewId(self.ids.new_id(REVIEW_ID_PREFIX)),
            order_id=order.id,
            product_id=order.product_id,
            buyer_id=actor_id,
            seller_id=order.seller_id,
            rating=rating,
            comment=comment,
        )
        self.repository.reviews.save(review)
        logger.info(
            "Review submitted",
            extra={"order_id": order.id, "user_id": actor_id},
        )
        return review

"""Transition Enforcement: pure checks guarding Product, Order and Review changes.

Invariants:
    - All functions are PURE: no IO, no store access, no side effects
    - Return a MarketError on violation, None on success (callers raise it)
    - Composite validators chain checks with `or`: first error wins
    - Product: AVAILABLE -> PENDING -> SOLD, AVAILABLE -> REMOVED; SOLD and REMOVED are final
    - Order: PENDING_SHIP -> SHIPPED -> COMPLETED; COMPLETED and CANCELLED are final
"""

from market.core.domain_types import (
    ProductStatus, OrderStatus, UserId, MIN_RATING, MAX_RATING,
)
from market.core.entities import Product, Order, Review
from market.core.errors import (
    MarketError, InvalidTransitionError, NotOwnerError,
    ProductUnavailableError, SelfTradeForbiddenError,
    DuplicateReviewError, InvalidArgumentError,
)


PRODUCT_TRANSITIONS: dict[ProductStatus, frozenset[ProductStatus]] = {
    ProductStatus.AVAILABLE: frozenset({ProductStatus.PENDING, ProductStatus.REMOVED}),
    ProductStatus.PENDING: frozenset({ProductStatus.SOLD}),
    ProductStatus.SOLD: frozenset(),
    ProductStatus.REMOVED: frozenset(),
}

ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING_SHIP: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

_PRODUCT_VERBS = {
    ProductStatus.PENDING: "reserved",
    ProductStatus.SOLD: "sold",
    ProductStatus.REMOVED: "removed",
}

_ORDER_VERBS = {
    OrderStatus.SHIPPED: "shipped",
    OrderStatus.COMPLETED: "completed",
}


# --- State machine edges -------------------------------------------------------

def check_product_transition(
    product: Product, target: ProductStatus,
) -> MarketError | None:
    if target in PRODUCT_TRANSITIONS[product.status]:
        return None
    return InvalidTransitionError(
        "Product", product.id, product.status.display_name,
        _PRODUCT_VERBS.get(target, target.value),
    )


def check_order_transition(
    order: Order, target: OrderStatus,
) -> MarketError | None:
    if target in ORDER_TRANSITIONS[order.status]:
        return None
    return InvalidTransitionError(
        "Order", order.id, order.status.display_name,
        _ORDER_VERBS.get(target, target.value),
    )


def check_product_editable(product: Product) -> MarketError | None:
    """Field edits are allowed only while the product is listed."""
    if product.status == ProductStatus.AVAILABLE:
        return None
    return InvalidTransitionError(
        "Product", product.id, product.status.display_name, "edited",
    )


# --- Ownership ------------------------------------------------------------------

def check_product_owner(product: Product, actor_id: UserId) -> MarketError | None:
    if product.seller_id != actor_id:
        return NotOwnerError("Product", product.id)
    return None


def check_order_seller(order: Order, actor_id: UserId) -> MarketError | None:
    if order.seller_id != actor_id:
        return NotOwnerError("Order", order.id)
    return None


def check_order_buyer(order: Order, actor_id: UserId) -> MarketError | None:
    if order.buyer_id != actor_id:
        return NotOwnerError("Order", order.id)
    return None


# --- Order placement ------------------------------------------------------------

def check_product_available(product: Product) -> MarketError | None:
    if product.status != ProductStatus.AVAILABLE:
        return ProductUnavailableError(product.id, product.status.display_name)
    return None


def check_not_self_trade(product: Product, buyer_id: UserId) -> MarketError | None:
    if product.seller_id == buyer_id:
        return SelfTradeForbiddenError(product.id)
    return None


def validate_order_placement(product: Product, buyer_id: UserId) -> MarketError | None:
    """Chain all placement checks. Returns first error or None."""
    return (
        check_product_available(product)
        or check_not_self_trade(product, buyer_id)
    )


# --- Reviews --------------------------------------------------------------------

def check_rating(rating: int) -> MarketError | None:
    if not MIN_RATING <= rating <= MAX_RATING:
        return InvalidArgumentError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}.", "rating",
        )
    return None


def check_order_reviewable(order: Order) -> MarketError | None:
    if order.status != OrderStatus.COMPLETED:
        return InvalidTransitionError(
            "Order", order.id, order.status.display_name, "reviewed",
        )
    return None


def check_no_prior_review(order: Order, existing: list[Review]) -> MarketError | None:
    if any(r.order_id == order.id for r in existing):
        return DuplicateReviewError(order.id)
    return None


def validate_review_submission(
    order: Order, actor_id: UserId, rating: int, existing: list[Review],
) -> MarketError | None:
    """Chain all review checks. Returns first error or None."""
    return (
        check_rating(rating)
        or check_order_buyer(order, actor_id)
        or check_order_reviewable(order)
        or check_no_prior_review(order, existing)
    )

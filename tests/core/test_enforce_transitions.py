"""Transition enforcement tests: pure checks for product, order and review rules."""

from decimal import Decimal

import pytest

from market.core.domain_types import (
    OrderId, ProductId, ReviewId, UserId, OrderStatus, ProductStatus,
)
from market.core.enforce_transitions import (
    check_product_transition, check_order_transition, check_product_editable,
    check_product_owner, check_order_seller, check_order_buyer,
    check_rating, validate_order_placement, validate_review_submission,
)
from market.core.entities import Order, Product, Review

SELLER = UserId("USR-S")
BUYER = UserId("USR-B")


def _product(status=ProductStatus.AVAILABLE):
    return Product(
        id=ProductId("PRD-1"), name="Bike", description="Blue bike",
        category="Transport", price=Decimal("200.00"), seller_id=SELLER,
        status=status,
    )


def _order(status=OrderStatus.PENDING_SHIP):
    return Order(
        id=OrderId("ORD-1"), product_id=ProductId("PRD-1"), buyer_id=BUYER,
        seller_id=SELLER, price=Decimal("200.00"), status=status,
    )


def _review():
    return Review(
        id=ReviewId("REV-1"), order_id=OrderId("ORD-1"),
        product_id=ProductId("PRD-1"), buyer_id=BUYER, seller_id=SELLER,
        rating=5, comment="great",
    )


# --- Product state machine -------------------------------------------------------

@pytest.mark.parametrize("current,target", [
    (ProductStatus.AVAILABLE, ProductStatus.PENDING),
    (ProductStatus.AVAILABLE, ProductStatus.REMOVED),
    (ProductStatus.PENDING, ProductStatus.SOLD),
])
def test_product_allowed_edges(current, target):
    assert check_product_transition(_product(current), target) is None


@pytest.mark.parametrize("current,target", [
    (ProductStatus.PENDING, ProductStatus.REMOVED),
    (ProductStatus.SOLD, ProductStatus.REMOVED),
    (ProductStatus.SOLD, ProductStatus.AVAILABLE),
    (ProductStatus.REMOVED, ProductStatus.AVAILABLE),
    (ProductStatus.AVAILABLE, ProductStatus.SOLD),
])
def test_product_forbidden_edges(current, target):
    error = check_product_transition(_product(current), target)
    assert error is not None
    assert error.code == "INVALID_TRANSITION"


def test_product_editable_only_while_available():
    assert check_product_editable(_product()) is None
    assert check_product_editable(_product(ProductStatus.PENDING)).code == "INVALID_TRANSITION"


# --- Order state machine ---------------------------------------------------------

def test_order_edges():
    assert check_order_transition(_order(), OrderStatus.SHIPPED) is None
    assert check_order_transition(_order(OrderStatus.SHIPPED), OrderStatus.COMPLETED) is None
    assert check_order_transition(_order(), OrderStatus.COMPLETED).code == "INVALID_TRANSITION"
    assert check_order_transition(
        _order(OrderStatus.COMPLETED), OrderStatus.SHIPPED,
    ).code == "INVALID_TRANSITION"
    assert check_order_transition(
        _order(OrderStatus.CANCELLED), OrderStatus.SHIPPED,
    ) is not None


# --- Ownership -------------------------------------------------------------------

def test_ownership_checks():
    assert check_product_owner(_product(), SELLER) is None
    assert check_product_owner(_product(), BUYER).code == "NOT_OWNER"
    assert check_order_seller(_order(), SELLER) is None
    assert check_order_seller(_order(), BUYER).code == "NOT_OWNER"
    assert check_order_buyer(_order(), BUYER) is None
    assert check_order_buyer(_order(), SELLER).code == "NOT_OWNER"


# --- Placement -------------------------------------------------------------------

def test_placement_requires_available_product():
    error = validate_order_placement(_product(ProductStatus.PENDING), BUYER)
    assert error.code == "PRODUCT_UNAVAILABLE"


def test_placement_forbids_self_trade():
    assert validate_order_placement(_product(), SELLER).code == "SELF_TRADE_FORBIDDEN"


def test_placement_unavailable_wins_over_self_trade():
    error = validate_order_placement(_product(ProductStatus.SOLD), SELLER)
    assert error.code == "PRODUCT_UNAVAILABLE"


def test_placement_ok():
    assert validate_order_placement(_product(), BUYER) is None


# --- Reviews ---------------------------------------------------------------------

@pytest.mark.parametrize("rating", [0, 6, -1])
def test_rating_out_of_range(rating):
    assert check_rating(rating).code == "INVALID_ARGUMENT"


def test_review_requires_completed_order():
    error = validate_review_submission(_order(OrderStatus.SHIPPED), BUYER, 5, [])
    assert error.code == "INVALID_TRANSITION"


def test_review_requires_buyer():
    error = validate_review_submission(_order(OrderStatus.COMPLETED), SELLER, 5, [])
    assert error.code == "NOT_OWNER"


def test_review_rejects_duplicate():
    error = validate_review_submission(
        _order(OrderStatus.COMPLETED), BUYER, 4, [_review()],
    )
    assert error.code == "DUPLICATE_REVIEW"


def test_review_ok():
    assert validate_review_submission(_order(OrderStatus.COMPLETED), BUYER, 1, []) is None

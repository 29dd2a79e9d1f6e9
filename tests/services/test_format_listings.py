"""Listing formatter tests."""

from decimal import Decimal

from market.core.domain_types import ProductId, UserId
from market.core.entities import Product
from market.services.format_listings import (
    truncate, money, format_table, product_table,
)


def test_truncate():
    assert truncate("short", 10) == "short"
    assert truncate("a very long product name", 10) == "a very ..."
    assert truncate(None, 5) == ""


def test_money_keeps_scale():
    assert money(Decimal("50.00")) == "¥50.00"


def test_format_table_counts_rows():
    text = format_table("Things", [("A", 3), ("B", 4)], [["x", "y"], ["z", "w"]], "thing(s)")
    lines = text.splitlines()
    assert lines[0] == "=== Things ==="
    assert lines[2] == "-" * 8
    assert lines[-1] == "2 thing(s)"


def test_product_table_with_seller_column():
    product = Product(
        id=ProductId("PRD-1"), name="Lamp", description="d", category="Home",
        price=Decimal("8"), seller_id=UserId("USR-9"),
    )
    text = product_table("All", [product], with_seller=True)
    assert "Seller ID" in text
    assert "USR-9" in text
    assert "Available" in text

"""Snapshot store tests against a temporary SQLite file."""

from datetime import timezone
from decimal import Decimal

from sqlalchemy import text

from market.core.domain_types import (
    OrderId, ProductId, ReviewId, UserId, UserRole, OrderStatus, ProductStatus,
)
from market.core.entities import Order, Product, Review, User
from market.core.entity_store import MarketRepository
from market.infrastructure.snapshot_store import SqlSnapshotStore


def _populated():
    repo = MarketRepository()
    repo.users.save(User(
        id=UserId("USR-1"), username="seller", password_hash="h",
        role=UserRole.SELLER, email="s@campus.edu",
    ))
    repo.users.save(User(
        id=UserId("USR-2"), username="buyer", password_hash="h",
        role=UserRole.BUYER, banned=True,
    ))
    product = repo.products.save(Product(
        id=ProductId("PRD-1"), name="Lamp", description="LED", category="Home",
        price=Decimal("80.00"), seller_id=UserId("USR-1"),
        status=ProductStatus.SOLD,
    ))
    order = Order(
        id=OrderId("ORD-1"), product_id=product.id, buyer_id=UserId("USR-2"),
        seller_id=UserId("USR-1"), price=Decimal("80.00"),
    ).shipped().completed()
    repo.orders.save(order)
    repo.reviews.save(Review(
        id=ReviewId("REV-1"), order_id=order.id, product_id=product.id,
        buyer_id=UserId("USR-2"), seller_id=UserId("USR-1"),
        rating=4, comment="bright",
    ))
    return repo


def test_round_trip_is_lossless(tmp_path):
    url = f"sqlite:///{tmp_path / 'snap.db'}"
    source = _populated()
    assert SqlSnapshotStore(source, url).save() is True

    target = MarketRepository()
    assert SqlSnapshotStore(target, url).load() is True
    assert target.users.find_by_id("USR-2") == source.users.find_by_id("USR-2")
    assert target.products.find_by_id("PRD-1") == source.products.find_by_id("PRD-1")
    assert target.reviews.find_by_id("REV-1") == source.reviews.find_by_id("REV-1")

    order = target.orders.find_by_id("ORD-1")
    assert order == source.orders.find_by_id("ORD-1")
    assert order.status == OrderStatus.COMPLETED
    assert order.received_at.tzinfo == timezone.utc
    assert str(target.products.find_by_id("PRD-1").price) == "80.00"


def test_save_replaces_previous_snapshot(tmp_path):
    url = f"sqlite:///{tmp_path / 'snap.db'}"
    repo = _populated()
    store = SqlSnapshotStore(repo, url)
    store.save()
    repo.reviews.clear()
    store.save()

    fresh = MarketRepository()
    SqlSnapshotStore(fresh, url).load()
    assert fresh.reviews.count() == 0
    assert fresh.users.count() == 2


def test_load_without_tables_returns_false_and_keeps_state(tmp_path):
    repo = _populated()
    store = SqlSnapshotStore(repo, f"sqlite:///{tmp_path / 'empty.db'}")
    assert store.load() is False
    assert repo.users.count() == 2


def test_load_rejects_unreadable_rows(tmp_path):
    url = f"sqlite:///{tmp_path / 'snap.db'}"
    store = SqlSnapshotStore(_populated(), url)
    store.save()
    with store.engine.begin() as conn:
        conn.execute(text("UPDATE users SET role = 'wizard' WHERE id = 'USR-1'"))

    target = MarketRepository()
    assert SqlSnapshotStore(target, url).load() is False
    assert target.users.count() == 0


def test_save_failure_returns_false(tmp_path):
    url = f"sqlite:///{tmp_path / 'missing-dir' / 'snap.db'}"
    assert SqlSnapshotStore(_populated(), url).save() is False


def test_unusable_url_reports_failure_instead_of_raising():
    repo = _populated()
    store = SqlSnapshotStore(repo, "nosuchdialect://x")
    assert store.load() is False
    assert store.save() is False
    assert repo.users.count() == 2

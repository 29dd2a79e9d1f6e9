"""Seed Data: default accounts and sample listings for a fresh market.

Invariants:
    - Seeds admin, buyer1 and seller1 (all with the configured default password)
    - Seeds three Available products owned by seller1
    - Only called when startup loaded nothing or found no users
"""

import logging
from decimal import Decimal

from market.core.domain_types import UserId, UserRole, USER_ID_PREFIX
from market.core.entities import User
from market.services.command_context import MarketContext

logger = logging.getLogger(__name__)

DEFAULT_USERS = (
    ("admin", UserRole.ADMIN, "admin@campus.edu"),
    ("buyer1", UserRole.BUYER, "buyer1@campus.edu"),
    ("seller1", UserRole.SELLER, "seller1@campus.edu"),
)

SAMPLE_PRODUCTS = (
    ("Used textbook - Java Programming",
     "Computer science textbook, like new, no notes", "Books", Decimal("50.00")),
    ("Bicycle",
     "Campus commuter bike, ridden for two years, good condition", "Transport",
     Decimal("200.00")),
    ("Desk lamp",
     "Eye-care LED desk lamp with adjustable brightness", "Household",
     Decimal("80.00")),
)


def seed_defaults(ctx: MarketContext, password: str) -> dict[str, User]:
    """Create the default accounts and sample products. Returns users by username."""
    digest = ctx.hasher.hash(password)
    users = {}
    for username, role, email in DEFAULT_USERS:
        user = User(
            id=UserId(ctx.ids.new_id(USER_ID_PREFIX)),
            username=username, password_hash=digest, role=role, email=email,
        )
        users[username] = ctx.repository.users.save(user)

    seller = users["seller1"]
    for name, description, category, price in SAMPLE_PRODUCTS:
        ctx.lifecycle.list_product(seller, name, description, category, price)

    logger.info(
        f"Seeded {len(users)} users and {len(SAMPLE_PRODUCTS)} products",
    )
    return users

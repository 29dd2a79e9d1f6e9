"""Domain Types: rich types that replace bare strings across the codebase.

Invariants:
    - UserId, ProductId, OrderId, ReviewId are opaque strings, immutable after creation
    - All valid states encoded as Enums (no raw string matching)
    - Every status enum carries a human-readable display name
    - Enum `.value` is the persisted form; the snapshot store writes it to text columns
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
ProductId = NewType("ProductId", str)
OrderId = NewType("OrderId", str)
ReviewId = NewType("ReviewId", str)


# ─── Id prefixes (passed to the id generator) ────────────────────

USER_ID_PREFIX = "USR"
PRODUCT_ID_PREFIX = "PRD"
ORDER_ID_PREFIX = "ORD"
REVIEW_ID_PREFIX = "REV"


# ─── Bounds ──────────────────────────────────────────────────────

MIN_RATING = 1
MAX_RATING = 5

# bcrypt reads at most 72 bytes of a password
MAX_PASSWORD_BYTES = 72


# ─── Enums ───────────────────────────────────────────────────────

class UserRole(str, Enum):
    """User roles. A user holds exactly one, fixed at creation."""
    ADMIN = "admin"
    BUYER = "buyer"
    SELLER = "seller"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class ProductStatus(str, Enum):
    """Product lifecycle: AVAILABLE -> PENDING -> SOLD, AVAILABLE -> REMOVED."""
    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"
    REMOVED = "removed"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class OrderStatus(str, Enum):
    """Order lifecycle: PENDING_SHIP -> SHIPPED -> COMPLETED. CANCELLED is terminal."""
    PENDING_SHIP = "pending_ship"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def display_name(self) -> str:
        return _ORDER_STATUS_NAMES[self]


_ORDER_STATUS_NAMES = {
    OrderStatus.PENDING_SHIP: "Pending shipment",
    OrderStatus.SHIPPED: "Shipped",
    OrderStatus.COMPLETED: "Completed",
    OrderStatus.CANCELLED: "Cancelled",
}


class EventKind(str, Enum):
    """Event kinds routed by the event channel."""
    ORDER_STATUS_CHANGED = "order_status_changed"
    PRODUCT_STATUS_CHANGED = "product_status_changed"

"""ORM Rows: one SQLAlchemy table per entity kind for whole-repository snapshots.

Invariants:
    - All rows inherit from Base (db/base.py)
    - Rows reference each other by id only (no foreign keys): a snapshot is four
      independent id-keyed collections, written and read as a unit
    - Every row converts to and from its core entity without loss

Design Decisions:
    - All rows imported here so Base.metadata knows every table before create_all()
"""

from market.models.user import UserRow  # noqa: F401
from market.models.product import ProductRow  # noqa: F401
from market.models.order import OrderRow  # noqa: F401
from market.models.review import ReviewRow  # noqa: F401

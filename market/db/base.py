"""SQLAlchemy Declarative Base: shared base class for the snapshot tables.

Invariants:
    - All snapshot row models inherit from Base
    - Base.metadata is the single source of truth for the snapshot schema
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all Campus Market ORM rows."""
    pass

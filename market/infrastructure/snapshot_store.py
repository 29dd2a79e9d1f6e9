"""Snapshot Store: whole-repository save/load over SQLAlchemy (SQLite by default).

Invariants:
    - save() writes all four collections in ONE transaction (all or nothing)
    - load() swaps the in-memory collections only after every row was read and converted
    - Every session rolls back on exception; SQLAlchemy errors map to PersistenceError
    - save() / load() never raise: failures are logged and reported as False
    - load() returns False when no snapshot tables exist yet
    - The engine is created on first use; an unusable URL or missing driver is a
      PersistenceError like any other storage failure

Design Decisions:
    - Synchronous engine, one command at a time
    - save() replaces every table; the in-memory store stays authoritative
"""

import logging
from contextlib import contextmanager
from decimal import InvalidOperation
from typing import Iterator

from sqlalchemy import Engine, create_engine, delete, inspect, select
from sqlalchemy.exc import (
    ArgumentError, DBAPIError, IntegrityError, NoSuchModuleError,
    OperationalError, SQLAlchemyError,
)
from sqlalchemy.orm import Session, sessionmaker

from market.core.entity_store import MarketRepository
from market.core.errors import PersistenceError
from market.db.base import Base
from market.models import UserRow, ProductRow, OrderRow, ReviewRow

logger = logging.getLogger(__name__)

_ROW_TYPES = (UserRow, ProductRow, OrderRow, ReviewRow)


class SqlSnapshotStore:
    """Implements core.collaborator_protocols.SnapshotStore."""

    def __init__(self, repository: MarketRepository, url: str):
        self.repository = repository
        self.url = url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            try:
                engine = create_engine(self.url)
            except (NoSuchModuleError, ArgumentError, ImportError) as e:
                logger.error(f"Cannot open snapshot database {self.url!r}: {e}")
                raise PersistenceError("Snapshot database unavailable", "connect") from e
            self._engine = engine
        return self._engine

    def _sessions(self) -> sessionmaker[Session]:
        if self._session_factory is None:
            self._session_factory = sessionmaker(self.engine, expire_on_commit=False)
        return self._session_factory

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Provide session with auto-rollback on exception."""
        session = self._sessions()()
        try:
            yield session
        except IntegrityError as e:
            session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise PersistenceError("Integrity constraint violated", "commit") from e
        except OperationalError as e:
            session.rollback()
            logger.error(f"DB operational error: {e}")
            raise PersistenceError("Connection or operational error", "execute") from e
        except DBAPIError as e:
            session.rollback()
            logger.error(f"DB driver error: {e}")
            raise PersistenceError("Database driver error", "query") from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise PersistenceError("Database operation failed", "unknown") from e
        finally:
            session.close()

    def save(self) -> bool:
        repo = self.repository
        rows = (
            [UserRow.from_entity(u) for u in repo.users.find_all()]
            + [ProductRow.from_entity(p) for p in repo.products.find_all()]
            + [OrderRow.from_entity(o) for o in repo.orders.find_all()]
            + [ReviewRow.from_entity(r) for r in repo.reviews.find_all()]
        )
        try:
            with self.session() as db:
                Base.metadata.create_all(db.get_bind())
                with db.begin():
                    for row_type in _ROW_TYPES:
                        db.execute(delete(row_type))
                    db.add_all(rows)
        except PersistenceError as e:
            logger.error(e.message, extra={"error_code": e.code})
            return False
        logger.info(f"Snapshot saved ({len(rows)} rows)")
        return True

    def load(self) -> bool:
        try:
            with self.session() as db:
                inspector = inspect(db.get_bind())
                missing = [
                    t.__tablename__ for t in _ROW_TYPES
                    if not inspector.has_table(t.__tablename__)
                ]
                if missing:
                    logger.info(f"No snapshot found (missing tables: {', '.join(missing)})")
                    return False
                users = [r.to_entity() for r in db.scalars(select(UserRow))]
                products = [r.to_entity() for r in db.scalars(select(ProductRow))]
                orders = [r.to_entity() for r in db.scalars(select(OrderRow))]
                reviews = [r.to_entity() for r in db.scalars(select(ReviewRow))]
        except PersistenceError as e:
            logger.error(e.message, extra={"error_code": e.code})
            return False
        except (ValueError, InvalidOperation) as e:
            logger.error(f"Snapshot contains unreadable rows: {e}")
            return False

        self.repository.users.replace_all(users)
        self.repository.products.replace_all(products)
        self.repository.orders.replace_all(orders)
        self.repository.reviews.replace_all(reviews)
        logger.info(
            f"Snapshot loaded ({len(users)} users, {len(products)} products, "
            f"{len(orders)} orders, {len(reviews)} reviews)"
        )
        return True

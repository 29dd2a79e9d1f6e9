"""Entity Store: keyed, internally synchronized collections of entities.

Invariants:
    - save() is an upsert by id: one atomic dict write of a fully built value
    - save() raises InvalidEntityError on an empty id
    - find_all() / find_by() return snapshot lists; callers never see the live dict
    - No cross-entity validation here (that is the lifecycle engine's job)
    - Safe for re-entrant use from event handlers running inside a store-mutating call

Design Decisions:
    - threading.RLock around a plain dict; subscribers may re-enter the store
      during the command that published the event
"""

import threading
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, TypeVar

from market.core.entities import User, Product, Order, Review
from market.core.errors import InvalidEntityError

T = TypeVar("T")


class EntityStore(Generic[T]):
    """Id-keyed collection of one entity kind."""

    def __init__(self, entity_type: str, id_of: Callable[[T], str] = lambda e: e.id):
        self.entity_type = entity_type
        self._id_of = id_of
        self._items: dict[str, T] = {}
        self._lock = threading.RLock()

    def save(self, entity: T) -> T:
        entity_id = self._id_of(entity)
        if not entity_id or not str(entity_id).strip():
            raise InvalidEntityError(self.entity_type)
        with self._lock:
            self._items[entity_id] = entity
        return entity

    def find_by_id(self, entity_id: str | None) -> T | None:
        if not entity_id:
            return None
        with self._lock:
            return self._items.get(entity_id)

    def find_all(self) -> list[T]:
        with self._lock:
            return list(self._items.values())

    def find_by(self, predicate: Callable[[T], bool] | None) -> list[T]:
        if predicate is None:
            return self.find_all()
        return [e for e in self.find_all() if predicate(e)]

    def delete(self, entity_id: str | None) -> bool:
        if not entity_id:
            return False
        with self._lock:
            return self._items.pop(entity_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def replace_all(self, entities: Iterable[T]) -> None:
        """Swap the whole collection (snapshot load)."""
        loaded = {self._id_of(e): e for e in entities}
        with self._lock:
            self._items = loaded


@dataclass
class MarketRepository:
    """The four stores the snapshot collaborator saves and loads as one unit."""
    users: EntityStore[User] = field(default_factory=lambda: EntityStore("User"))
    products: EntityStore[Product] = field(default_factory=lambda: EntityStore("Product"))
    orders: EntityStore[Order] = field(default_factory=lambda: EntityStore("Order"))
    reviews: EntityStore[Review] = field(default_factory=lambda: EntityStore("Review"))

    def find_user_by_username(self, username: str) -> User | None:
        matches = self.users.find_by(lambda u: u.username == username)
        return matches[0] if matches else None

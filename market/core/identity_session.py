"""Identity Session: the zero-or-one logged-in user of this process.

Invariants:
    - login() replaces the current identity unconditionally (credentials checked by caller)
    - is_banned() is False when nobody is logged in
    - refresh() re-reads the identity from the user store; a vanished user is logged out
"""

from market.core.domain_types import UserRole
from market.core.entities import User
from market.core.entity_store import EntityStore


class IdentitySession:
    """Single-operator terminal session. Constructed once at startup and injected."""

    def __init__(self) -> None:
        self._user: User | None = None

    def login(self, user: User) -> None:
        self._user = user

    def logout(self) -> None:
        self._user = None

    def current(self) -> User | None:
        return self._user

    def is_authenticated(self) -> bool:
        return self._user is not None

    def is_banned(self) -> bool:
        return self._user is not None and self._user.banned

    @property
    def role(self) -> UserRole | None:
        return self._user.role if self._user else None

    def refresh(self, users: EntityStore[User]) -> None:
        if self._user is None:
            return
        self._user = users.find_by_id(self._user.id)

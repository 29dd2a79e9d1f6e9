"""Command Registry: named operations with their required role sets.

Invariants:
    - Names are stored lower-cased; several entries may share one name
    - Entries keep registration order (system, buyer, seller, admin at startup)
    - An entry with an empty role set is unrestricted
    - A restricted entry needs an authenticated, non-banned session whose role is in the set
    - resolve() picks the first authorized entry; a later authorized entry whose role
      set contains the session's role overrides the pick

Design Decisions:
    - Explicit register() calls from each command group's register_commands():
      every name -> handler mapping is visible, no decorator scanning
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable

from market.core.domain_types import UserRole
from market.core.errors import (
    UnknownCommandError, NotAuthenticatedError, BannedError, WrongRoleError,
)
from market.core.identity_session import IdentitySession

CommandHandler = Callable[[list[str]], dict]


@dataclass(frozen=True)
class CommandEntry:
    name: str
    handler: CommandHandler
    description: str
    roles: frozenset[UserRole] = field(default_factory=frozenset)

    @property
    def restricted(self) -> bool:
        return bool(self.roles)


class CommandRegistry:
    """Name -> ordered list of CommandEntry."""

    def __init__(self) -> None:
        self._entries: dict[str, list[CommandEntry]] = {}

    def register(
        self, name: str, handler: CommandHandler, description: str,
        roles: Iterable[UserRole] = (),
    ) -> CommandEntry:
        entry = CommandEntry(
            name=name.lower(), handler=handler, description=description,
            roles=frozenset(roles),
        )
        self._entries.setdefault(entry.name, []).append(entry)
        return entry

    def candidates(self, name: str) -> list[CommandEntry]:
        return list(self._entries.get(name.lower(), []))

    @staticmethod
    def is_authorized(entry: CommandEntry, session: IdentitySession) -> bool:
        if not entry.restricted:
            return True
        if not session.is_authenticated() or session.is_banned():
            return False
        return session.role in entry.roles

    def select(
        self, name: str, session: IdentitySession,
    ) -> CommandEntry | None:
        """Best authorized entry for name, or None."""
        picked: CommandEntry | None = None
        for entry in self.candidates(name):
            if not self.is_authorized(entry, session):
                continue
            if picked is None or session.role in entry.roles:
                picked = entry
        return picked

    def resolve(self, name: str, session: IdentitySession) -> CommandEntry:
        """Like select(), but raises UnknownCommand / Forbidden subclasses."""
        if not self.candidates(name):
            raise UnknownCommandError(name)
        picked = self.select(name, session)
        if picked is not None:
            return picked
        if not session.is_authenticated():
            raise NotAuthenticatedError()
        if session.is_banned():
            raise BannedError()
        raise WrongRoleError(session.role.display_name)

    def available_commands(self, session: IdentitySession) -> dict[str, str]:
        """{name: description} for every command the session may invoke now."""
        available = {}
        for name in self._entries:
            entry = self.select(name, session)
            if entry is not None:
                available[name] = entry.description
        return available

"""Command Context: collaborators shared by every command group, plus argument helpers.

Invariants:
    - One MarketContext per process, built by main.build_application
    - Handlers reach the store, session and lifecycle engine only through the context
    - Usage errors are InvalidArgumentError carrying a "Usage: ..." message
"""

from dataclasses import dataclass
from typing import Callable, Mapping

from market.core.collaborator_protocols import (
    PasswordHasher, IdGenerator, SnapshotStore, FieldPrompt, Emitter,
)
from market.core.entities import User
from market.core.entity_store import MarketRepository
from market.core.errors import InvalidArgumentError, NotAuthenticatedError
from market.core.event_channel import EventChannel
from market.core.identity_session import IdentitySession
from market.core.lifecycle import LifecycleEngine
from market.services.command_registry import CommandRegistry

SubAction = Callable[[list[str]], dict]


@dataclass
class MarketContext:
    repository: MarketRepository
    session: IdentitySession
    events: EventChannel
    lifecycle: LifecycleEngine
    registry: CommandRegistry
    hasher: PasswordHasher
    ids: IdGenerator
    snapshots: SnapshotStore
    prompt: FieldPrompt
    emit: Emitter

    def actor(self) -> User:
        """Logged-in user. Restricted commands only run when one exists."""
        user = self.session.current()
        if user is None:
            raise NotAuthenticatedError()
        return user


def ok(message: str, **extra: object) -> dict:
    return {"status": "ok", "message": message, **extra}


def require_arg(args: list[str], index: int, usage: str) -> str:
    if len(args) <= index:
        raise InvalidArgumentError(f"Usage: {usage}")
    return args[index]


def run_action(
    actions: Mapping[str, SubAction], args: list[str], usage: str,
) -> dict:
    """Route args[0] to its sub-action; missing or unknown sub-action is a usage error."""
    if not args:
        raise InvalidArgumentError(f"Usage: {usage}")
    action = actions.get(args[0].lower())
    if action is None:
        raise InvalidArgumentError(
            f"Unknown action '{args[0]}'. Usage: {usage}", "action",
        )
    return action(args)

"""Campus Market: terminal application entry point.

Invariants:
    - Command groups registered explicitly, in order: system, buyer, seller, admin
    - Startup loads the snapshot; seeds defaults when nothing (or no user) was loaded,
      including when the snapshot store cannot be opened at all
    - The loop dispatches one line at a time and stops on exit or end of input
    - Logging configured once in run(), never at import time

Design Decisions:
    - build_application() takes prompt/emit/hasher/ids so tests can drive the whole
      app without a terminal or real bcrypt rounds
"""

import logging
from dataclasses import dataclass

from market.config import Settings, get_settings
from market.core.collaborator_protocols import (
    FieldPrompt, Emitter, PasswordHasher, IdGenerator,
)
from market.core.entity_store import MarketRepository
from market.core.event_channel import EventChannel
from market.core.identity_session import IdentitySession
from market.core.lifecycle import LifecycleEngine
from market.infrastructure.console import ConsolePrompt, emit_line
from market.infrastructure.id_generator import UuidIdGenerator
from market.infrastructure.observability import setup_logging
from market.infrastructure.password_hasher import BcryptPasswordHasher
from market.infrastructure.snapshot_store import SqlSnapshotStore
from market.services import handle_system, handle_buyer, handle_seller, handle_admin
from market.services.command_context import MarketContext
from market.services.command_dispatch import CommandDispatch
from market.services.command_registry import CommandRegistry
from market.services.notifications import register_subscribers
from market.services.seed_data import seed_defaults

logger = logging.getLogger(__name__)

BANNER = """========================================
   Campus Market - command line edition
========================================
Type 'help' to list available commands.
Type 'login' to sign in or 'register' to create an account.
Type 'exit' to quit."""


@dataclass
class MarketApp:
    context: MarketContext
    dispatch: CommandDispatch

    def prompt_text(self) -> str:
        user = self.context.session.current()
        if user is None:
            return "[guest] > "
        return f"[{user.username}@{user.role.display_name}] > "

    def execute(self, line: str) -> dict:
        return self.dispatch.execute(line)


def build_application(
    settings: Settings,
    prompt: FieldPrompt | None = None,
    emit: Emitter | None = None,
    hasher: PasswordHasher | None = None,
    ids: IdGenerator | None = None,
) -> MarketApp:
    """Wire every component. Does not touch the snapshot store."""
    emit = emit or emit_line
    ids = ids or UuidIdGenerator()
    repository = MarketRepository()
    session = IdentitySession()
    events = EventChannel()
    registry = CommandRegistry()
    ctx = MarketContext(
        repository=repository,
        session=session,
        events=events,
        lifecycle=LifecycleEngine(repository, events, ids),
        registry=registry,
        hasher=hasher or BcryptPasswordHasher(),
        ids=ids,
        snapshots=SqlSnapshotStore(repository, settings.snapshot_url),
        prompt=prompt or ConsolePrompt(),
        emit=emit,
    )

    # Registration order decides which group wins a shared command name
    handle_system.register_commands(registry, ctx)
    handle_buyer.register_commands(registry, ctx)
    handle_seller.register_commands(registry, ctx)
    handle_admin.register_commands(registry, ctx)

    register_subscribers(events, emit)
    return MarketApp(
        context=ctx,
        dispatch=CommandDispatch(registry, session, repository.users),
    )


def start(app: MarketApp, settings: Settings) -> bool:
    """Load the snapshot or seed defaults. Returns True when seeded."""
    ctx = app.context
    loaded = ctx.snapshots.load()
    if loaded and ctx.repository.users.count() > 0:
        return False
    if not settings.seed_default_data:
        return False
    seed_defaults(ctx, settings.default_password)
    ctx.emit(
        "Default data created.\n"
        f"  Admin:  admin / {settings.default_password}\n"
        f"  Buyer:  buyer1 / {settings.default_password}\n"
        f"  Seller: seller1 / {settings.default_password}"
    )
    return True


def run_loop(app: MarketApp, lines, emit: Emitter) -> None:
    """Dispatch lines until exit. `lines` yields raw input (prompt already shown)."""
    for line in lines:
        result = app.execute(line)
        if result.get("message"):
            emit(result["message"])
        if result.get("exit"):
            return


def _stdin_lines(app: MarketApp):
    while True:
        try:
            yield input(app.prompt_text())
        except EOFError:
            return


def run() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app = build_application(settings)
    emit_line(BANNER)
    start(app, settings)
    try:
        run_loop(app, _stdin_lines(app), emit_line)
    except KeyboardInterrupt:
        emit_line("")
    logger.info("Campus Market shutting down")


if __name__ == "__main__":
    run()

"""System Handlers: unrestricted commands (login, register, logout, help, save, load, exit).

Invariants:
    - Every command here is registered with an empty role set
    - login is refused when already logged in, on bad credentials and for banned users
    - register is refused when logged in and only creates Buyers or Sellers
    - exit asks whether to save first and returns exit=True
"""

import logging

from market.core.domain_types import UserId, USER_ID_PREFIX
from market.core.entities import User
from market.core.errors import (
    AuthenticationError, BannedError, ConflictError, ForbiddenError,
    NotAuthenticatedError, PersistenceError,
)
from market.schemas.forms import RegistrationForm, parse_input
from market.services.command_context import MarketContext, ok
from market.services.command_registry import CommandRegistry

logger = logging.getLogger(__name__)

_YES = frozenset({"y", "yes"})


class SystemHandlers:
    """Session and housekeeping commands."""

    def __init__(self, ctx: MarketContext):
        self.ctx = ctx

    def login(self, args: list[str]) -> dict:
        if self.ctx.session.is_authenticated():
            raise ForbiddenError(
                "You are already logged in. Log out first.", "ALREADY_AUTHENTICATED",
            )
        username = self.ctx.prompt.ask("Username")
        password = self.ctx.prompt.ask("Password", secret=True)
        user = self.ctx.repository.find_user_by_username(username)
        if user is None or not self.ctx.hasher.verify(password, user.password_hash):
            raise AuthenticationError()
        if user.banned:
            raise BannedError()
        self.ctx.session.login(user)
        logger.info("User logged in", extra={"user_id": user.id})
        return ok(
            f"Login successful. Welcome, {user.username} ({user.role.display_name}).\n"
            "Type 'help' to list available commands."
        )

    def register(self, args: list[str]) -> dict:
        if self.ctx.session.is_authenticated():
            raise ForbiddenError(
                "Log out before registering a new account.", "ALREADY_AUTHENTICATED",
            )
        ask = self.ctx.prompt.ask
        username = ask("Username").strip()
        if username and self.ctx.repository.find_user_by_username(username):
            raise ConflictError(f"Username '{username}' is already taken.")
        form = parse_input(
            RegistrationForm,
            username=username,
            password=ask("Password", secret=True),
            confirm_password=ask("Confirm password", secret=True),
            role_choice=ask("Role (1 = Buyer, 2 = Seller)"),
            email=ask("Email (optional)"),
            phone=ask("Phone (optional)"),
        )
        user = User(
            id=UserId(self.ctx.ids.new_id(USER_ID_PREFIX)),
            username=form.username,
            password_hash=self.ctx.hasher.hash(form.password),
            role=form.role,
            email=form.email,
            phone=form.phone,
        )
        self.ctx.repository.users.save(user)
        logger.info("User registered", extra={"user_id": user.id})
        return ok(
            f"Registration successful.\nUser ID: {user.id}\n"
            "Use 'login' to sign in."
        )

    def logout(self, args: list[str]) -> dict:
        user = self.ctx.session.current()
        if user is None:
            raise NotAuthenticatedError()
        self.ctx.session.logout()
        logger.info("User logged out", extra={"user_id": user.id})
        return ok(f"Logged out. Goodbye, {user.username}.")

    def help(self, args: list[str]) -> dict:
        registry = self.ctx.registry
        session = self.ctx.session
        general, role_specific = [], []
        for name, description in registry.available_commands(session).items():
            entry = registry.select(name, session)
            line = f"  {name:<20} - {description}"
            (role_specific if entry.restricted else general).append(line)

        lines = ["=== Available Commands ===", "", "General commands:", *general]
        if session.role is not None and role_specific:
            lines += ["", f"{session.role.display_name} commands:", *role_specific]
        elif session.role is None:
            lines += ["", "Log in to see more commands."]
        return ok("\n".join(lines))

    def save(self, args: list[str]) -> dict:
        if not self.ctx.snapshots.save():
            raise PersistenceError("see the log for details", "save")
        return ok("Data saved.")

    def load(self, args: list[str]) -> dict:
        if not self.ctx.snapshots.load():
            raise PersistenceError("no readable snapshot found", "load")
        self.ctx.session.refresh(self.ctx.repository.users)
        repo = self.ctx.repository
        return ok(
            f"Data loaded: {repo.users.count()} users, {repo.products.count()} products, "
            f"{repo.orders.count()} orders, {repo.reviews.count()} reviews."
        )

    def exit(self, args: list[str]) -> dict:
        answer = self.ctx.prompt.ask("Save data before exiting? (y/n)").lower()
        lines = []
        if answer in _YES:
            lines.append("Data saved." if self.ctx.snapshots.save() else "WARNING: Save failed.")
        lines.append("Goodbye!")
        return ok("\n".join(lines), exit=True)


def register_commands(registry: CommandRegistry, ctx: MarketContext) -> None:
    system = SystemHandlers(ctx)
    registry.register("login", system.login, "Log in")
    registry.register("register", system.register, "Create a Buyer or Seller account")
    registry.register("logout", system.logout, "Log out")
    registry.register("help", system.help, "Show available commands")
    registry.register("save", system.save, "Save data to the snapshot store")
    registry.register("load", system.load, "Load data from the snapshot store")
    registry.register("exit", system.exit, "Exit the program")

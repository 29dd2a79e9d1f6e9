"""Command Dispatch: one input line -> resolved handler -> result dict.

Invariants:
    - Input is split on runs of whitespace; first token is the lower-cased command name
    - Blank input is a no-op (ok result, empty message)
    - The session is refreshed from the user store before resolution
    - Every MarketError becomes one error result; dispatch never raises
    - Unexpected exceptions are logged with traceback and reported as INTERNAL_ERROR
    - Every result carries "status" ("ok" | "error") and "message"

Design Decisions:
    - Resolution lives in CommandRegistry; this module only parses, calls and reports
"""

import logging

from market.core.entities import User
from market.core.entity_store import EntityStore
from market.core.errors import MarketError, ErrorContext, ErrorSeverity
from market.core.identity_session import IdentitySession
from market.services.command_registry import CommandRegistry

logger = logging.getLogger(__name__)

# Expected refusals stay below the default WARNING threshold
_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.DEBUG,
    ErrorSeverity.WARNING: logging.INFO,
    ErrorSeverity.ERROR: logging.INFO,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def parse_line(line: str) -> tuple[str, list[str]]:
    """'order  create PRD-1' -> ('order', ['create', 'PRD-1'])."""
    tokens = line.split()
    if not tokens:
        return "", []
    return tokens[0].lower(), tokens[1:]


class CommandDispatch:
    """Routes a raw command line to the best authorized handler."""

    def __init__(
        self, registry: CommandRegistry, session: IdentitySession,
        users: EntityStore[User],
    ):
        self.registry = registry
        self.session = session
        self.users = users

    def execute(self, line: str) -> dict:
        name, args = parse_line(line)
        if not name:
            return {"status": "ok", "message": ""}

        self.session.refresh(self.users)
        actor = self.session.current()
        user_id = actor.id if actor else None
        try:
            entry = self.registry.resolve(name, self.session)
            result = entry.handler(args)
        except MarketError as e:
            e.context = ErrorContext(command=name, user_id=user_id)
            logger.log(
                _LOG_LEVELS[e.severity],
                f"Command failed: {e.message}",
                extra={
                    "command": e.context.command,
                    "user_id": e.context.user_id,
                    "error_code": e.code,
                },
            )
            return e.to_result()
        except Exception as e:
            logger.error(
                f"Unexpected error in command '{name}': {e}",
                extra={"command": name, "user_id": user_id, "error_code": "INTERNAL_ERROR"},
                exc_info=True,
            )
            return {
                "status": "error",
                "error_code": "INTERNAL_ERROR",
                "message": "ERROR: An unexpected error occurred.",
            }
        logger.debug("Command executed", extra={"command": name, "user_id": user_id})
        return result

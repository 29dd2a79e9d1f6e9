"""Moderation Enforcement: pure checks guarding admin ban/unban.

Invariants:
    - Administrators can never be banned
    - Banning a banned user or unbanning an active one is an invalid transition
    - Return a MarketError on violation, None on success
"""

from market.core.domain_types import UserRole
from market.core.entities import User
from market.core.errors import (
    MarketError, AdminProtectedError, InvalidTransitionError,
)


def check_not_admin(user: User) -> MarketError | None:
    if user.role == UserRole.ADMIN:
        return AdminProtectedError(user.id)
    return None


def check_ban_state(user: User, banned: bool) -> MarketError | None:
    if user.banned == banned:
        current = "Banned" if user.banned else "Active"
        return InvalidTransitionError(
            "User", user.id, current, "banned" if banned else "unbanned",
        )
    return None


def validate_ban_change(user: User, banned: bool) -> MarketError | None:
    """Ban checks the admin guard first; unban only checks state."""
    if banned:
        return check_not_admin(user) or check_ban_state(user, True)
    return check_ban_state(user, False)

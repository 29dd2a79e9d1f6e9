"""Moderation enforcement tests."""

from market.core.domain_types import UserId, UserRole
from market.core.enforce_moderation import validate_ban_change
from market.core.entities import User


def _user(role=UserRole.BUYER, banned=False):
    return User(
        id=UserId("USR-1"), username="u", password_hash="x", role=role, banned=banned,
    )


def test_admin_cannot_be_banned():
    assert validate_ban_change(_user(UserRole.ADMIN), True).code == "ADMIN_PROTECTED"


def test_ban_active_user_ok():
    assert validate_ban_change(_user(), True) is None


def test_ban_already_banned():
    assert validate_ban_change(_user(banned=True), True).code == "INVALID_TRANSITION"


def test_unban_requires_banned():
    assert validate_ban_change(_user(), False).code == "INVALID_TRANSITION"
    assert validate_ban_change(_user(banned=True), False) is None

"""Admin command tests: moderation and oversight listings."""

from market.core.domain_types import UserId, UserRole
from market.core.entities import User


def _second_admin(market):
    return market.repo.users.save(User(
        id=UserId("USR-ADMIN2"), username="admin2",
        password_hash="plain:123456", role=UserRole.ADMIN,
    ))


def test_banning_an_admin_fails_and_target_unchanged(market):
    target = _second_admin(market)
    market.login("admin")
    result = market.run(f"user ban {target.id}")
    assert result["error_code"] == "ADMIN_PROTECTED"
    assert market.repo.users.find_by_id(target.id) == target


def test_ban_and_unban_buyer(market):
    buyer_id = market.user_id("buyer1")
    market.login("admin")
    assert market.run(f"user ban {buyer_id}")["status"] == "ok"
    assert market.repo.users.find_by_id(buyer_id).banned is True
    assert market.run(f"user ban {buyer_id}")["error_code"] == "INVALID_TRANSITION"

    assert market.run(f"user unban {buyer_id}")["status"] == "ok"
    assert market.repo.users.find_by_id(buyer_id).banned is False
    assert market.run(f"user unban {buyer_id}")["error_code"] == "INVALID_TRANSITION"


def test_banned_user_cannot_log_in(market):
    buyer_id = market.user_id("buyer1")
    market.login("admin")
    market.run(f"user ban {buyer_id}")
    market.run("logout")
    result = market.login("buyer1")
    assert result["error_code"] == "BANNED"
    assert market.ctx.session.is_authenticated() is False


def test_ban_unknown_user(market):
    market.login("admin")
    assert market.run("user ban USR-404")["error_code"] == "RESOURCE_NOT_FOUND"
    assert market.run("user ban")["error_code"] == "INVALID_ARGUMENT"


def test_user_list(market):
    market.login("admin")
    result = market.run("user list")
    assert result["count"] == 3
    assert "seller1" in result["message"]


def test_oversight_listings(market):
    market.login("buyer1")
    market.run("order create PRD-00000003")
    market.login("admin")
    assert market.run("order all")["count"] == 1
    assert market.run("review all")["count"] == 0
    assert "no reviews" in market.run("review all")["message"]
    assert market.run("product mine")["error_code"] == "INVALID_ARGUMENT"


def test_non_admin_cannot_moderate(market):
    market.login("buyer1")
    assert market.run("user list")["error_code"] == "WRONG_ROLE"

"""Dispatcher tests: parsing, error results, role routing through the real app."""

import logging

from market.core.domain_types import ProductStatus
from market.services.command_dispatch import parse_line


def test_parse_line_splits_on_whitespace_runs():
    assert parse_line("  Order   create\tPRD-1 ") == ("order", ["create", "PRD-1"])
    assert parse_line("   ") == ("", [])


def test_blank_line_is_noop(market):
    assert market.run("   ") == {"status": "ok", "message": ""}


def test_unknown_command_is_reported(market):
    result = market.run("teleport now")
    assert result["status"] == "error"
    assert result["error_code"] == "UNKNOWN_COMMAND"
    assert result["message"].startswith("ERROR: ")


def test_anonymous_cannot_search(market):
    result = market.run("search")
    assert result["error_code"] == "NOT_AUTHENTICATED"


def test_anonymous_can_run_help(market):
    result = market.run("help")
    assert result["status"] == "ok"
    assert "login" in result["message"]
    assert "search" not in result["message"]


def test_product_as_buyer_routes_to_buyer_group(market):
    market.login("buyer1")
    result = market.run("product detail PRD-00000001")
    assert result["status"] == "ok"
    assert "Product Detail" in result["message"]


def test_product_as_seller_routes_to_seller_group(market):
    market.login("seller1")
    result = market.run("product detail PRD-00000001")
    assert result["error_code"] == "INVALID_ARGUMENT"
    assert "add|my|edit|remove" in result["message"]


def test_product_as_admin_routes_to_admin_group(market):
    market.login("admin")
    result = market.run("product all")
    assert result["status"] == "ok"
    assert result["count"] == 3


def test_seller_cannot_review(market):
    market.login("seller1")
    result = market.run("review add ORD-1 5 nice")
    assert result["error_code"] == "WRONG_ROLE"


def test_banned_user_is_stopped_on_next_command(market):
    market.login("buyer1")
    buyer = market.repo.find_user_by_username("buyer1")
    market.repo.users.save(buyer.with_banned(True))
    result = market.run("search")
    assert result["error_code"] == "BANNED"


def test_handler_crash_becomes_internal_error(market):
    market.login("buyer1")

    def explode(predicate):
        raise RuntimeError("disk on fire")

    market.repo.products.find_by = explode
    result = market.run("search")
    assert result["error_code"] == "INTERNAL_ERROR"
    assert "disk on fire" not in result["message"]
    # Loop keeps working afterwards
    assert market.run("help")["status"] == "ok"


def test_search_filters(market):
    market.login("buyer1")
    result = market.run("search Bicycle")
    assert result["count"] == 1
    assert market.run("search")["count"] == 3
    by_price = market.run("search e 60 100")
    assert by_price["count"] == 1
    assert "Desk lamp" in by_price["message"]


def test_search_is_case_sensitive_and_skips_unavailable(market):
    market.login("buyer1")
    assert market.run("search bicycle")["count"] == 0
    market.run("order create PRD-00000002")
    assert market.repo.products.find_by_id("PRD-00000002").status == ProductStatus.PENDING
    assert market.run("search Bicycle")["count"] == 0


def test_search_rejects_bad_price(market):
    market.login("buyer1")
    assert market.run("search x abc")["error_code"] == "INVALID_ARGUMENT"
    assert market.run("search x 100 10")["error_code"] == "INVALID_ARGUMENT"


def test_missing_sub_action_is_usage_error(market):
    market.login("buyer1")
    result = market.run("order")
    assert result["error_code"] == "INVALID_ARGUMENT"
    assert "Usage" in result["message"]
    assert market.run("order fly")["error_code"] == "INVALID_ARGUMENT"


def _failure_record(caplog):
    return next(r for r in caplog.records if r.getMessage().startswith("Command failed"))


def test_refusal_logged_at_info_with_command_context(market, caplog):
    caplog.set_level(logging.DEBUG, logger="market.services.command_dispatch")
    market.run("teleport now")
    record = _failure_record(caplog)
    assert record.levelno == logging.INFO
    assert record.command == "teleport"
    assert record.user_id is None
    assert record.error_code == "UNKNOWN_COMMAND"


def test_persistence_failure_logged_at_error(market, caplog):
    caplog.set_level(logging.DEBUG, logger="market.services.command_dispatch")
    market.run("load")
    record = _failure_record(caplog)
    assert record.levelno == logging.ERROR
    assert record.error_code == "PERSISTENCE_ERROR"

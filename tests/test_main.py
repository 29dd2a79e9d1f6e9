"""Startup and main-loop tests: snapshot-or-seed decision, loop termination."""

from market.config import Settings
from market.main import run_loop, start


def test_start_seeds_empty_store_and_prints_credentials(settings, build_app):
    outputs: list[str] = []
    app = build_app(settings, outputs)
    assert start(app, settings) is True
    assert app.context.repository.users.count() == 3
    assert app.context.repository.products.count() == 3
    assert "admin / 123456" in outputs[0]


def test_start_skips_seeding_when_snapshot_has_users(market, settings, build_app):
    market.login("buyer1")
    market.run("order create PRD-00000001")
    assert market.run("save")["status"] == "ok"

    outputs: list[str] = []
    app = build_app(settings, outputs)
    assert start(app, settings) is False
    assert outputs == []
    assert app.context.repository.users.count() == 3
    assert app.context.repository.orders.count() == 1


def test_start_without_seeding_leaves_store_empty(settings, build_app):
    settings = settings.model_copy(update={"seed_default_data": False})
    outputs: list[str] = []
    app = build_app(settings, outputs)
    assert start(app, settings) is False
    assert app.context.repository.users.count() == 0
    assert outputs == []


def test_unusable_snapshot_url_falls_back_to_seeded_state(build_app, prompt):
    settings = Settings(snapshot_url="nosuchdialect://x")
    outputs: list[str] = []
    app = build_app(settings, outputs)
    assert start(app, settings) is True
    assert app.context.repository.find_user_by_username("admin") is not None
    prompt.feed("admin", "123456")
    assert app.execute("login")["status"] == "ok"
    assert app.execute("save")["error_code"] == "PERSISTENCE_ERROR"


def test_run_loop_stops_on_exit(market):
    emitted: list[str] = []
    market.prompt.feed("n")
    lines = iter(["help", "exit", "help"])
    run_loop(market.app, lines, emitted.append)
    assert len(emitted) == 2
    assert emitted[1] == "Goodbye!"
    assert next(lines) == "help"


def test_run_loop_stops_at_end_of_input_and_skips_empty_messages(market):
    emitted: list[str] = []
    run_loop(market.app, ["   ", "", "help"], emitted.append)
    assert len(emitted) == 1
    assert "General commands:" in emitted[0]

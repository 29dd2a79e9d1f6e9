"""Settings tests."""

from market.config import Settings


def test_defaults():
    settings = Settings()
    assert settings.snapshot_url == "sqlite:///campus-market.db"
    assert settings.seed_default_data is True
    assert settings.default_password == "123456"
    assert settings.log_format == "text"


def test_bare_path_becomes_sqlite_url():
    assert Settings(snapshot_url="/tmp/market.db").snapshot_url == "sqlite:////tmp/market.db"


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("MARKET_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("MARKET_SEED_DEFAULT_DATA", "false")
    settings = Settings()
    assert settings.log_level == "DEBUG"
    assert settings.seed_default_data is False

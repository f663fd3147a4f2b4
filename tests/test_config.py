"""Settings — tests for defaults and JACKUT_ environment overrides."""

from jackut.config import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("JACKUT_DATABASE_URL", raising=False)
    monkeypatch.delenv("JACKUT_LOG_FORMAT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.database_url == "sqlite:///data/jackut.db"
    assert settings.users_snapshot_key == "users"
    assert settings.communities_snapshot_key == "communities"
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"


def test_environment_override(monkeypatch):
    monkeypatch.setenv("JACKUT_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("JACKUT_USERS_SNAPSHOT_KEY", "people")
    settings = Settings(_env_file=None)
    assert settings.log_level == "DEBUG"
    assert settings.users_snapshot_key == "people"


def test_async_sqlite_url_is_made_sync():
    settings = Settings(database_url="sqlite+aiosqlite:///data/x.db", _env_file=None)
    assert settings.database_url == "sqlite:///data/x.db"


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()

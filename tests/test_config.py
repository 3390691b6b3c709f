from __future__ import annotations

import logging
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

from videoboard.core.config import get_settings
from videoboard.core.logging_config import setup_logging
from videoboard.db.session import normalize_database_url
from videoboard.repositories import JsonStorage, SQLRepository
from videoboard.services.storage_service import build_storage, health_status


def test_defaults_select_file_storage(clean_env):
    clean_env.delenv("API_PREFIX", raising=False)
    clean_env.delenv("CORS_ORIGINS", raising=False)
    clean_env.delenv("DATA_FILE", raising=False)
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.use_sql is False
    assert settings.api_prefix == "/api"
    assert settings.cors_origins == ("*",)
    assert settings.data_file.name == "data.json"


def test_database_url_falls_back_to_postgres_vars(clean_env):
    clean_env.setenv("POSTGRES_URL", "postgres://u:p@host/db")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.use_sql is True
    assert settings.database_url == "postgres://u:p@host/db"


def test_blank_database_url_is_ignored(clean_env):
    clean_env.setenv("DATABASE_URL", "   ")
    get_settings.cache_clear()
    assert get_settings().use_sql is False


def test_env_parsing(clean_env, tmp_path):
    clean_env.setenv("API_PREFIX", "v1/")
    clean_env.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    clean_env.setenv("DATA_FILE", str(tmp_path / "x.json"))
    clean_env.setenv("LOG_FORMAT", "yaml")
    clean_env.setenv("PORT", "not-a-number")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.api_prefix == "/v1"
    assert settings.cors_origins == ("http://a.test", "http://b.test")
    assert settings.data_file == Path(tmp_path / "x.json")
    assert settings.log_format == "text"
    assert settings.port == 3000


def test_normalize_database_url():
    assert normalize_database_url("postgres://h/db") == "postgresql://h/db"
    assert normalize_database_url(" sqlite:///x.db ") == "sqlite:///x.db"


def test_build_storage_uses_file_without_database_url(clean_env, tmp_path):
    clean_env.setenv("DATA_FILE", str(tmp_path / "data.json"))
    get_settings.cache_clear()
    storage = build_storage()
    assert isinstance(storage, JsonStorage)
    assert (tmp_path / "data.json").exists()
    assert health_status(storage) == {"status": "ok", "storage": "file"}


def test_build_storage_uses_sql_with_database_url(temp_db):
    storage = build_storage()
    assert isinstance(storage, SQLRepository)
    assert health_status(storage) == {"status": "ok", "storage": "sqlite"}


def test_health_degraded_when_file_is_broken(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("oops", encoding="utf-8")
    assert health_status(JsonStorage(path)) == {"status": "degraded", "storage": "file"}


def test_json_log_format_uses_json_formatter(clean_env):
    clean_env.setenv("LOG_FORMAT", "json")
    get_settings.cache_clear()
    root = logging.getLogger()
    previous = list(root.handlers)
    try:
        setup_logging()
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)
    finally:
        root.handlers[:] = previous

"""
Configuration helpers for the videoboard backend.

Routers and repositories read settings through get_settings() instead of
fetching os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

ROOT_DIR = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    data_file: Path
    api_prefix: str
    cors_origins: tuple[str, ...]
    static_dir: Path | None
    log_level: str
    log_format: str
    port: int

    @property
    def use_sql(self) -> bool:
        return bool(self.database_url)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _first(*names: str) -> str:
        for name in names:
            value = (os.getenv(name) or "").strip()
            if value:
                return value
        return ""

    def _prefix(value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value

    def _origins(value: str) -> tuple[str, ...]:
        items = tuple(x.strip() for x in value.split(",") if x.strip())
        return items or ("*",)

    data_file = _first("DATA_FILE")
    static_dir = _first("STATIC_DIR")
    log_format = (os.getenv("LOG_FORMAT") or "text").strip().lower()

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=_first("DATABASE_URL", "POSTGRES_URL_NON_POOLING", "POSTGRES_URL"),
        data_file=Path(data_file) if data_file else ROOT_DIR / "data.json",
        api_prefix=_prefix(os.getenv("API_PREFIX", "/api")),
        cors_origins=_origins(os.getenv("CORS_ORIGINS", "*")),
        static_dir=Path(static_dir) if static_dir else None,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        log_format=log_format if log_format in {"text", "json"} else "text",
        port=_int(os.getenv("PORT"), 3000),
    )

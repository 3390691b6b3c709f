"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from videoboard.core.config import get_settings
from videoboard.core.errors import BackendUnavailableError

Base = declarative_base()


def normalize_database_url(url: str) -> str:
    """Rewrite Heroku/Vercel style postgres:// URLs for SQLAlchemy."""
    url = (url or "").strip()
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite ignora ON DELETE CASCADE sem este pragma
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@lru_cache
def get_engine():
    settings = get_settings()
    url = normalize_database_url(settings.database_url)
    if not url:
        raise BackendUnavailableError("DATABASE_URL must be configured to use the SQL backend.")
    connect_args = {}
    if url.startswith("postgresql") and settings.app_env == "prod":
        connect_args["sslmode"] = "require"
    engine = create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


@lru_cache
def _get_sessionmaker():
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, future=True)


@contextmanager
def get_session() -> Session:
    session: Session = _get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()

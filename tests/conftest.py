from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote videoboard seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from videoboard.core import config as core_config  # noqa: E402
from videoboard.db import models  # noqa: E402
from videoboard.db import session as db_session  # noqa: E402
from videoboard.repositories.json_storage import JsonStorage  # noqa: E402
from videoboard.repositories.sql_repository import SQLRepository  # noqa: E402

DB_ENV_VARS = ("DATABASE_URL", "POSTGRES_URL_NON_POOLING", "POSTGRES_URL")


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def clean_env(monkeypatch):
    """Remove variaveis de banco herdadas do ambiente do desenvolvedor."""
    for name in DB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    _clear_caches()
    yield monkeypatch
    _clear_caches()


@pytest.fixture()
def temp_db(tmp_path, clean_env):
    """Configura um SQLite temporário e garante teardown completo para não deixar o arquivo bloqueado no Windows."""
    db_file = tmp_path / "test.db"
    clean_env.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    _clear_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    try:
        models.Base.metadata.drop_all(bind=engine)
    except Exception:
        pass
    try:
        engine.dispose()
    except Exception:
        pass
    _clear_caches()


@pytest.fixture()
def json_storage(tmp_path, clean_env):
    storage = JsonStorage(tmp_path / "data.json")
    storage.init()
    return storage


@pytest.fixture()
def sql_storage(temp_db):
    storage = SQLRepository()
    storage.init()
    return storage


@pytest.fixture(params=["json", "sql"])
def storage(request):
    """Runs a test once per backend."""
    return request.getfixturevalue(f"{request.param}_storage")

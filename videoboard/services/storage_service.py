"""Pick and prepare the storage backend for the running process."""

from __future__ import annotations

import logging

from videoboard.core.config import Settings, get_settings
from videoboard.core.errors import StorageError
from videoboard.repositories import JsonStorage, SQLRepository, StorageAdapter

logger = logging.getLogger(__name__)


def build_storage(settings: Settings | None = None) -> StorageAdapter:
    """
    SQL when a connection string is configured, JSON file otherwise.

    Called once at startup; the result is shared by every request.
    """
    settings = settings or get_settings()
    if settings.use_sql:
        storage: StorageAdapter = SQLRepository()
    else:
        storage = JsonStorage(settings.data_file)
    storage.init()
    return storage


def health_status(storage: StorageAdapter) -> dict:
    ok = storage.ping()
    if not ok:
        logger.warning("Storage probe failed for %s backend", type(storage).__name__)
    try:
        label = storage.name
    except StorageError:
        label = "unknown"
    return {"status": "ok" if ok else "degraded", "storage": label}

"""
FastAPI routers grouped by resource (data, groups, videos, health).

Each module exposes an APIRouter included by app.create_app(). Handlers are
thin: they fetch the StorageAdapter from app.state and translate results to
HTTP responses.
"""

from fastapi import Request

from videoboard.repositories.base import StorageAdapter


def get_storage(request: Request) -> StorageAdapter:
    storage = getattr(getattr(request.app, "state", None), "storage", None)
    if storage is None:
        raise RuntimeError("Storage not configured")
    return storage

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from videoboard.core.config import Settings, get_settings
from videoboard.core.errors import (
    BackendUnavailableError,
    DuplicateKeyError,
    InvalidRecordError,
    StorageError,
)
from videoboard.core.logging_config import setup_logging
from videoboard.repositories.base import StorageAdapter
from videoboard.routers import data as data_router
from videoboard.routers import groups as groups_router
from videoboard.routers import health as health_router
from videoboard.routers import videos as videos_router
from videoboard.services.storage_service import build_storage

logger = logging.getLogger(__name__)

_ERROR_STATUS = (
    (InvalidRecordError, 400),
    (DuplicateKeyError, 409),
    (BackendUnavailableError, 503),
)


async def _storage_error_handler(request: Request, exc: StorageError):
    status_code = next((code for kind, code in _ERROR_STATUS if isinstance(exc, kind)), 500)
    if status_code >= 500:
        logger.error(
            "Storage failure on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
    return JSONResponse(status_code=status_code, content={"error": exc.message})


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Request body must be a JSON object"})


async def _unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Settings | None = None, storage: StorageAdapter | None = None) -> FastAPI:
    """Factory compatível com uvicorn (--factory) e com os testes."""
    settings = settings or get_settings()
    setup_logging()

    app = FastAPI(title="videoboard API")
    app.state.settings = settings
    app.state.storage = storage or build_storage(settings)

    wildcard = "*" in settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if wildcard else sorted(settings.cors_origins),
        allow_credentials=not wildcard,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorageError, _storage_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    prefix = settings.api_prefix
    app.include_router(data_router.router, prefix=prefix)
    app.include_router(groups_router.router, prefix=prefix)
    app.include_router(videos_router.router, prefix=prefix)
    app.include_router(health_router.router, prefix=prefix)

    # front-end estatico opcional (viewer/editor)
    if settings.static_dir and settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    logger.info("videoboard ready: storage=%s prefix=%s", type(app.state.storage).__name__, prefix or "/")
    return app


if __name__ == "__main__":
    uvicorn.run("videoboard.app:create_app", factory=True, host="0.0.0.0", port=get_settings().port)

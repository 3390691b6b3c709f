from fastapi import APIRouter, Request

from videoboard.routers import get_storage
from videoboard.services.storage_service import health_status

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
    return health_status(get_storage(request))

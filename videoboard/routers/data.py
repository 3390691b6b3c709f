from fastapi import APIRouter, Request

from videoboard.routers import get_storage

router = APIRouter(tags=["data"])


@router.get("/data")
def get_data(request: Request):
    return get_storage(request).get_all()


@router.put("/data")
def replace_data(payload: dict, request: Request):
    """Bulk import: everything stored is replaced by payload."""
    get_storage(request).replace_all(payload)
    return {"success": True}

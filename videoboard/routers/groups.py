from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from videoboard.routers import get_storage

router = APIRouter(prefix="/groups", tags=["groups"])


def _not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "Group not found"})


@router.get("")
def list_groups(request: Request):
    return get_storage(request).list_groups()


@router.post("", status_code=201)
def create_group(payload: dict, request: Request):
    return get_storage(request).create_group(payload)


@router.put("/{group_id}")
def update_group(group_id: str, payload: dict, request: Request):
    group = get_storage(request).update_group(group_id, payload)
    if group is None:
        return _not_found()
    return group


@router.delete("/{group_id}")
def delete_group(group_id: str, request: Request):
    if not get_storage(request).delete_group(group_id):
        return _not_found()
    return {"success": True}

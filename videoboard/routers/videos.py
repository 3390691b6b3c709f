from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from videoboard.routers import get_storage

router = APIRouter(prefix="/videos", tags=["videos"])


def _not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "Video not found"})


@router.get("")
def list_videos(request: Request):
    return get_storage(request).list_videos()


@router.post("", status_code=201)
def create_video(payload: dict, request: Request):
    # id do cliente e ignorado; o backend gera um novo
    return get_storage(request).create_video(payload)


@router.put("/{video_id}")
def update_video(video_id: str, payload: dict, request: Request):
    video = get_storage(request).update_video(video_id, payload)
    if video is None:
        return _not_found()
    return video


@router.delete("/{video_id}")
def delete_video(video_id: str, request: Request):
    if not get_storage(request).delete_video(video_id):
        return _not_found()
    return {"success": True}

"""Shape validation/normalization for group and video payloads."""
from __future__ import annotations

from typing import Any, Mapping

from videoboard.core.errors import DuplicateKeyError, InvalidRecordError

GROUP_FIELDS = ("id", "name", "description")
VIDEO_FIELDS = ("groupId", "url", "username", "caption", "description")


def _text(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list, tuple, set)):
        raise InvalidRecordError(f"Field '{field}' must be a string")
    return value if isinstance(value, str) else str(value)


def _optional(value: Any, field: str) -> str | None:
    """Empty optional values are stored as null, like the original API."""
    text = _text(value, field)
    return text or None


def _required(data: Mapping[str, Any], field: str, kind: str) -> str:
    text = _text(data.get(field), field)
    if not text:
        raise InvalidRecordError(f"{kind} '{field}' is required")
    return text


def _ensure_mapping(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise InvalidRecordError(f"{kind} must be a JSON object")
    return data


def normalize_group(data: Any) -> dict:
    """Return a group dict with exactly id/name/description."""
    data = _ensure_mapping(data, "Group")
    return {
        "id": _required(data, "id", "Group"),
        "name": _required(data, "name", "Group"),
        "description": _optional(data.get("description"), "description"),
    }


def merge_group(existing: Mapping[str, Any], patch: Any) -> dict:
    """
    Apply only the fields present in patch on top of existing.

    An empty or missing patch id keeps the current id; name cannot be cleared.
    """
    patch = _ensure_mapping(patch, "Group")
    merged = {field: existing.get(field) for field in GROUP_FIELDS}
    if "id" in patch:
        new_id = _text(patch.get("id"), "id")
        if new_id:
            merged["id"] = new_id
    if "name" in patch:
        merged["name"] = _required(patch, "name", "Group")
    if "description" in patch:
        merged["description"] = _optional(patch.get("description"), "description")
    return merged


def normalize_video(data: Any) -> dict:
    """Return the editable video fields; any caller id is dropped."""
    data = _ensure_mapping(data, "Video")
    return {
        "groupId": _optional(data.get("groupId"), "groupId"),
        "url": _required(data, "url", "Video"),
        "username": _required(data, "username", "Video"),
        "caption": _optional(data.get("caption"), "caption"),
        "description": _optional(data.get("description"), "description"),
    }


def normalize_dataset(payload: Any) -> tuple[list[dict], list[dict]]:
    """
    Validate a bulk import payload before any backend touches its data.

    Videos keep the incoming id under "id" (None when absent) so the file
    backend can preserve it; the SQL backend ignores it.
    """
    payload = _ensure_mapping(payload, "Payload")
    raw_groups = payload.get("groups") or []
    raw_videos = payload.get("videos") or []
    if not isinstance(raw_groups, list) or not isinstance(raw_videos, list):
        raise InvalidRecordError("'groups' and 'videos' must be lists")

    groups = [normalize_group(item) for item in raw_groups]
    seen: set[str] = set()
    for group in groups:
        if group["id"] in seen:
            raise DuplicateKeyError(f"Duplicate group id '{group['id']}'")
        seen.add(group["id"])

    videos = []
    for item in raw_videos:
        fields = normalize_video(item)
        videos.append({"id": _optional(item.get("id"), "id"), **fields})
    return groups, videos

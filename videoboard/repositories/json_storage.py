"""
JSON-file persistence adapter.

The whole dataset lives in one document that is loaded, mutated and written
back on every call. An in-process lock keeps threads of the same worker from
interleaving; separate processes writing the same file can still lose updates.
"""

from __future__ import annotations

import json
import logging
import os
import secrets
import threading
from pathlib import Path
from typing import Any, Optional

from videoboard.core.errors import DuplicateKeyError, StorageIOError
from videoboard.domain.records import (
    merge_group,
    normalize_dataset,
    normalize_group,
    normalize_video,
)

from .base import StorageAdapter

logger = logging.getLogger(__name__)


def new_video_id() -> str:
    return secrets.token_hex(16)


def db_defaults(db: dict) -> dict:
    for key in ("groups", "videos"):
        if db.get(key) is None:
            db[key] = []
        elif not isinstance(db[key], list):
            raise StorageIOError(f"'{key}' must be a JSON list")
        elif not all(isinstance(item, dict) for item in db[key]):
            raise StorageIOError(f"'{key}' must only hold JSON objects")
    return db


class JsonStorage(StorageAdapter):
    """StorageAdapter backed by a single JSON file."""

    name = "file"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    # -------------------------- file access --------------------------
    def init(self) -> None:
        with self._lock:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.save({"groups": [], "videos": []})
        logger.info("Using file storage: %s", self.path)

    def ping(self) -> bool:
        try:
            self.load()
        except StorageIOError:
            return False
        return True

    def load(self) -> dict:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {"groups": [], "videos": []}
        except (OSError, ValueError) as exc:
            raise StorageIOError(f"Failed to read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageIOError(f"{self.path} does not hold a JSON object")
        return db_defaults(data)

    def save(self, db: dict) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(json.dumps(db, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as exc:
            raise StorageIOError(f"Failed to write {self.path}: {exc}") from exc

    # -------------------------- bulk --------------------------
    def get_all(self) -> dict:
        with self._lock:
            db = self.load()
        return {"groups": _sorted_groups(db["groups"]), "videos": db["videos"]}

    def replace_all(self, payload: Any) -> None:
        groups, videos = normalize_dataset(payload)
        used: set[str] = set()
        for video in videos:
            if not video["id"] or video["id"] in used:
                video["id"] = new_video_id()
            used.add(video["id"])
        with self._lock:
            self.save({"groups": groups, "videos": videos})
        logger.info("Replaced dataset: %d groups, %d videos", len(groups), len(videos))

    # -------------------------- groups --------------------------
    def list_groups(self) -> list[dict]:
        with self._lock:
            return _sorted_groups(self.load()["groups"])

    def create_group(self, group: Any) -> dict:
        record = normalize_group(group)
        with self._lock:
            db = self.load()
            if _find(db["groups"], record["id"]) is not None:
                raise DuplicateKeyError(f"Group '{record['id']}' already exists")
            db["groups"].append(record)
            self.save(db)
        return record

    def update_group(self, group_id: str, patch: Any) -> Optional[dict]:
        with self._lock:
            db = self.load()
            index = _find(db["groups"], group_id)
            if index is None:
                return None
            merged = merge_group(db["groups"][index], patch)
            new_id = merged["id"]
            if new_id != group_id:
                if _find(db["groups"], new_id) is not None:
                    raise DuplicateKeyError(f"Group '{new_id}' already exists")
                for video in db["videos"]:
                    if video.get("groupId") == group_id:
                        video["groupId"] = new_id
            db["groups"][index] = merged
            self.save(db)
        return merged

    def delete_group(self, group_id: str) -> bool:
        with self._lock:
            db = self.load()
            index = _find(db["groups"], group_id)
            if index is None:
                return False
            del db["groups"][index]
            db["videos"] = [v for v in db["videos"] if v.get("groupId") != group_id]
            self.save(db)
        return True

    # -------------------------- videos --------------------------
    def list_videos(self) -> list[dict]:
        with self._lock:
            return self.load()["videos"]

    def create_video(self, video: Any) -> dict:
        record = {"id": "", **normalize_video(video)}
        with self._lock:
            db = self.load()
            existing = {v.get("id") for v in db["videos"]}
            record["id"] = new_video_id()
            while record["id"] in existing:
                record["id"] = new_video_id()
            db["videos"].append(record)
            self.save(db)
        return record

    def update_video(self, video_id: str, patch: Any) -> Optional[dict]:
        with self._lock:
            db = self.load()
            index = _find(db["videos"], video_id)
            if index is None:
                return None
            record = {"id": db["videos"][index]["id"], **normalize_video(patch)}
            db["videos"][index] = record
            self.save(db)
        return record

    def delete_video(self, video_id: str) -> bool:
        with self._lock:
            db = self.load()
            index = _find(db["videos"], video_id)
            if index is None:
                return False
            del db["videos"][index]
            self.save(db)
        return True


def _find(items: list[dict], item_id: str) -> Optional[int]:
    for index, item in enumerate(items):
        if isinstance(item, dict) and item.get("id") == item_id:
            return index
    return None


def _sorted_groups(groups: list[dict]) -> list[dict]:
    return sorted(groups, key=lambda g: str(g.get("name") or ""))

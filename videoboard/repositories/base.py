"""Storage contract shared by the JSON and SQL backends."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class StorageAdapter(ABC):
    """
    Data-access contract for groups and videos.

    Records are plain dicts in their external (camelCase) shape. "Not found"
    is signalled by None (updates) or False (deletes); every other failure
    raises a StorageError subclass.
    """

    name: str = "unknown"

    @abstractmethod
    def init(self) -> None:
        """Prepare the backend. Safe to call more than once."""

    @abstractmethod
    def ping(self) -> bool:
        """Return True when the backend answers."""

    # -------------------------- bulk --------------------------
    @abstractmethod
    def get_all(self) -> dict:
        """Snapshot of the whole dataset: {"groups": [...], "videos": [...]}."""

    @abstractmethod
    def replace_all(self, payload: Any) -> None:
        """Discard the current dataset and store payload's groups/videos."""

    # -------------------------- groups --------------------------
    @abstractmethod
    def list_groups(self) -> list[dict]:
        """Groups ordered by name."""

    @abstractmethod
    def create_group(self, group: Any) -> dict:
        ...

    @abstractmethod
    def update_group(self, group_id: str, patch: Any) -> Optional[dict]:
        """Merge patch; a new id renames the group and re-points its videos."""

    @abstractmethod
    def delete_group(self, group_id: str) -> bool:
        """Delete the group and every video that references it."""

    # -------------------------- videos --------------------------
    @abstractmethod
    def list_videos(self) -> list[dict]:
        ...

    @abstractmethod
    def create_video(self, video: Any) -> dict:
        """Store a video under a freshly generated id."""

    @abstractmethod
    def update_video(self, video_id: str, patch: Any) -> Optional[dict]:
        """Overwrite groupId/url/username/caption/description."""

    @abstractmethod
    def delete_video(self, video_id: str) -> bool:
        ...

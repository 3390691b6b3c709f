"""SQL persistence adapter backed by SQLAlchemy."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Optional

from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, SQLAlchemyError

from videoboard.core.errors import (
    BackendUnavailableError,
    DuplicateKeyError,
    StorageError,
    StorageIOError,
)
from videoboard.db.models import Group, Video
from videoboard.db.session import Base, get_engine, get_session
from videoboard.domain.records import (
    merge_group,
    normalize_dataset,
    normalize_group,
    normalize_video,
)

from .base import StorageAdapter

logger = logging.getLogger(__name__)

# videos.id is a 32-bit SERIAL in Postgres
_MAX_VIDEO_ID = 2**31 - 1


@contextmanager
def _translate_errors(action: str, *, duplicate: str | None = None):
    """Turn SQLAlchemy exceptions into StorageError subclasses."""
    try:
        yield
    except StorageError:
        raise
    except IntegrityError as exc:
        if duplicate:
            raise DuplicateKeyError(duplicate) from exc
        raise StorageIOError(f"Failed to {action}: {exc.orig}") from exc
    except (OperationalError, InterfaceError) as exc:
        raise BackendUnavailableError(f"Database unavailable, could not {action}: {exc.orig}") from exc
    except SQLAlchemyError as exc:
        raise StorageIOError(f"Failed to {action}: {exc}") from exc


def _group_to_dict(entity: Group) -> dict:
    return {
        "id": entity.id,
        "name": entity.name,
        "description": entity.description,
    }


def _video_to_dict(entity: Video) -> dict:
    return {
        "id": str(entity.id),
        "groupId": entity.group_id,
        "url": entity.url,
        "username": entity.username,
        "caption": entity.caption,
        "description": entity.description,
    }


def _video_columns(fields: dict) -> dict:
    return {
        "group_id": fields["groupId"],
        "url": fields["url"],
        "username": fields["username"],
        "caption": fields["caption"],
        "description": fields["description"],
    }


def _video_key(video_id: str) -> Optional[int]:
    """Public ids are strings; anything that is not a valid key cannot exist."""
    value = video_id if isinstance(video_id, str) else str(video_id)
    if not (value.isascii() and value.isdecimal()):
        return None
    key = int(value)
    # "01" nao pode virar o video 1
    if str(key) != value or not 0 < key <= _MAX_VIDEO_ID:
        return None
    return key


class SQLRepository(StorageAdapter):
    """StorageAdapter over the groups/videos tables."""

    @property
    def name(self) -> str:
        return get_engine().dialect.name

    def init(self) -> None:
        with _translate_errors("create tables"):
            Base.metadata.create_all(bind=get_engine())
        logger.info("Using SQL storage (%s)", self.name)

    def ping(self) -> bool:
        try:
            with get_engine().connect() as conn:
                conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, StorageError) as exc:
            logger.warning("Database ping failed: %s", exc)
            return False
        return True

    # -------------------------- bulk --------------------------
    def get_all(self) -> dict:
        with _translate_errors("load dataset"), get_session() as session:
            groups = session.execute(select(Group).order_by(Group.name)).scalars().all()
            videos = session.execute(select(Video).order_by(Video.id)).scalars().all()
            return {
                "groups": [_group_to_dict(g) for g in groups],
                "videos": [_video_to_dict(v) for v in videos],
            }

    def replace_all(self, payload: Any) -> None:
        groups, videos = normalize_dataset(payload)
        with _translate_errors("replace dataset"), get_session() as session:
            # videos primeiro por causa da FK
            session.execute(delete(Video))
            session.execute(delete(Group))
            for group in groups:
                session.execute(insert(Group).values(**group))
            for video in videos:
                session.execute(insert(Video).values(**_video_columns(video)))
            session.commit()
        logger.info("Replaced dataset: %d groups, %d videos", len(groups), len(videos))

    # -------------------------- groups --------------------------
    def list_groups(self) -> list[dict]:
        with _translate_errors("list groups"), get_session() as session:
            stmt = select(Group).order_by(Group.name)
            return [_group_to_dict(g) for g in session.execute(stmt).scalars().all()]

    def create_group(self, group: Any) -> dict:
        record = normalize_group(group)
        duplicate = f"Group '{record['id']}' already exists"
        with _translate_errors("create group", duplicate=duplicate), get_session() as session:
            session.add(Group(**record))
            session.commit()
        return record

    def update_group(self, group_id: str, patch: Any) -> Optional[dict]:
        with _translate_errors("update group", duplicate="Group id already in use"), get_session() as session:
            entity = session.get(Group, group_id)
            if entity is None:
                return None
            merged = merge_group(_group_to_dict(entity), patch)
            new_id = merged["id"]
            if new_id == group_id:
                entity.name = merged["name"]
                entity.description = merged["description"]
                session.commit()
                return merged

            if session.get(Group, new_id) is not None:
                raise DuplicateKeyError(f"Group '{new_id}' already exists")
            # rename: new row, re-point videos, drop old row, one transaction
            session.add(Group(**merged))
            session.flush()
            session.execute(update(Video).where(Video.group_id == group_id).values(group_id=new_id))
            session.execute(delete(Group).where(Group.id == group_id))
            session.commit()
        logger.info("Renamed group %s -> %s", group_id, new_id)
        return merged

    def delete_group(self, group_id: str) -> bool:
        with _translate_errors("delete group"), get_session() as session:
            result = session.execute(delete(Group).where(Group.id == group_id))
            session.commit()
            return result.rowcount > 0

    # -------------------------- videos --------------------------
    def list_videos(self) -> list[dict]:
        with _translate_errors("list videos"), get_session() as session:
            stmt = select(Video).order_by(Video.id)
            return [_video_to_dict(v) for v in session.execute(stmt).scalars().all()]

    def create_video(self, video: Any) -> dict:
        entity = Video(**_video_columns(normalize_video(video)))
        with _translate_errors("create video"), get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return _video_to_dict(entity)

    def update_video(self, video_id: str, patch: Any) -> Optional[dict]:
        key = _video_key(video_id)
        if key is None:
            return None
        with _translate_errors("update video"), get_session() as session:
            entity = session.get(Video, key)
            if entity is None:
                return None
            for column, value in _video_columns(normalize_video(patch)).items():
                setattr(entity, column, value)
            session.commit()
            session.refresh(entity)
            return _video_to_dict(entity)

    def delete_video(self, video_id: str) -> bool:
        key = _video_key(video_id)
        if key is None:
            return False
        with _translate_errors("delete video"), get_session() as session:
            result = session.execute(delete(Video).where(Video.id == key))
            session.commit()
            return result.rowcount > 0

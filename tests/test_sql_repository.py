"""
Smoke tests for the SQLRepository against a temporary SQLite database.
"""
from __future__ import annotations

import pytest
from sqlalchemy import inspect, text

from videoboard.core.errors import StorageIOError
from videoboard.db import session as db_session
from videoboard.db.create_tables import create_all
from videoboard.repositories.sql_repository import SQLRepository


def _seed(repo: SQLRepository) -> dict:
    repo.create_group({"id": "g1", "name": "Cats"})
    return repo.create_video({"groupId": "g1", "url": "http://x", "username": "u"})


def test_init_is_idempotent(sql_storage):
    _seed(sql_storage)
    sql_storage.init()
    tables = set(create_all())
    assert tables == set(inspect(db_session.get_engine()).get_table_names())
    assert {"groups", "videos"} <= tables
    assert len(sql_storage.list_videos()) == 1


def test_video_ids_are_numeric_strings(sql_storage):
    video = _seed(sql_storage)
    assert video["id"].isdigit()
    second = sql_storage.create_video({"groupId": "g1", "url": "http://y", "username": "u"})
    assert int(second["id"]) > int(video["id"])


def test_ids_not_reused_after_delete(sql_storage):
    video = _seed(sql_storage)
    sql_storage.delete_video(video["id"])
    again = sql_storage.create_video({"groupId": "g1", "url": "http://x", "username": "u"})
    assert again["id"] != video["id"]


@pytest.mark.parametrize(
    "bad_id", ["abc", "", "-1", "0", "99999999999", "\u00b3", "\u0661", " 1", "1 ", "01"]
)
def test_non_key_video_ids_are_not_found(sql_storage, bad_id):
    video = _seed(sql_storage)
    assert video["id"] == "1"
    patch = {"groupId": "g1", "url": "http://y", "username": "v"}
    assert sql_storage.update_video(bad_id, patch) is None
    assert sql_storage.delete_video(bad_id) is False
    assert sql_storage.list_videos() == [video]


def test_video_with_unknown_group_is_rejected(sql_storage):
    with pytest.raises(StorageIOError):
        sql_storage.create_video({"groupId": "ghost", "url": "http://x", "username": "u"})
    assert sql_storage.list_videos() == []


def test_replace_all_rolls_back_on_failure(sql_storage):
    video = _seed(sql_storage)
    payload = {
        "groups": [{"id": "new", "name": "New"}],
        "videos": [{"groupId": "missing", "url": "http://z", "username": "u"}],
    }
    with pytest.raises(StorageIOError):
        sql_storage.replace_all(payload)
    assert [g["id"] for g in sql_storage.list_groups()] == ["g1"]
    assert sql_storage.list_videos() == [video]


def test_cascade_is_enforced_by_foreign_key(sql_storage):
    _seed(sql_storage)
    with db_session.get_session() as session:
        session.execute(text("DELETE FROM groups WHERE id = 'g1'"))
        session.commit()
    assert sql_storage.list_videos() == []


def test_name_reports_dialect(sql_storage):
    assert sql_storage.name == "sqlite"

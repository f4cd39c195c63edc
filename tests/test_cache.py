# tests/test_cache.py

from __future__ import annotations

from datetime import timezone

from todo_sync.core.cache import LocalCache
from todo_sync.core.models import Task

from .fakes import make_task


def test_replace_all_drops_foreign_rows_and_keeps_order() -> None:
    cache = LocalCache("u1")
    cache.replace_all([make_task(3), make_task(1), make_task(2, user_id="intruder")])
    assert [t.id for t in cache] == [3, 1]


def test_patches_touch_only_the_target_field() -> None:
    cache = LocalCache("u1")
    cache.replace_all([make_task(1, "A"), make_task(2, "B")])

    assert cache.patch_completion(2, True)
    assert cache.patch_title(1, "A2")
    assert cache.snapshot() == [make_task(1, "A2"), make_task(2, "B", is_complete=True)]


def test_patch_and_remove_missing_id_are_noops() -> None:
    cache = LocalCache("u1")
    cache.replace_all([make_task(1, "A")])
    assert not cache.patch_title(9, "x")
    assert not cache.remove(9)
    assert cache.snapshot() == [make_task(1, "A")]


def test_task_from_row_parses_postgrest_timestamp() -> None:
    t = Task.from_row(
        {
            "id": "7",
            "title": "Buy milk",
            "is_complete": False,
            "created_at": "2024-05-01T10:20:30.123456Z",
            "user_id": "u1",
        }
    )
    assert t.id == 7
    assert t.created_at is not None
    assert t.created_at.tzinfo == timezone.utc
    assert t.created_at.year == 2024

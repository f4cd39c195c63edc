# src/todo_sync/core/cache.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .models import Task

logger = logging.getLogger(__name__)


class LocalCache:
    """
    In-memory snapshot of the remote task list for one session.

    It is a stale snapshot, never assumed to be a superset or subset of the
    remote state:
    - replace_all() after a full fetch
    - patch_*() / remove() after a confirmed synchronous mutation

    Every entry belongs to owner_id; foreign rows are dropped on replace.
    """

    def __init__(self, owner_id: str) -> None:
        self.owner_id = owner_id
        self._items: list[Task] = []

    def __iter__(self) -> Iterator[Task]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def snapshot(self) -> list[Task]:
        return list(self._items)

    def get(self, task_id: int) -> Task | None:
        for t in self._items:
            if t.id == task_id:
                return t
        return None

    def replace_all(self, tasks: Iterable[Task]) -> None:
        kept: list[Task] = []
        for t in tasks:
            if t.user_id != self.owner_id:
                logger.warning("Dropping task id=%s with foreign owner from fetch result", t.id)
                continue
            kept.append(t)
        self._items = kept
        logger.debug("Cache replaced: %d tasks", len(kept))

    def patch_completion(self, task_id: int, value: bool) -> bool:
        return self._patch(task_id, lambda t: t.with_completion(value))

    def patch_title(self, task_id: int, title: str) -> bool:
        return self._patch(task_id, lambda t: t.with_title(title))

    def remove(self, task_id: int) -> bool:
        before = len(self._items)
        self._items = [t for t in self._items if t.id != task_id]
        return len(self._items) != before

    def _patch(self, task_id: int, fn) -> bool:
        for i, t in enumerate(self._items):
            if t.id == task_id:
                self._items[i] = fn(t)
                return True
        # Row may have vanished in a refresh between trigger and response.
        logger.debug("Patch skipped: task id=%s not in cache", task_id)
        return False

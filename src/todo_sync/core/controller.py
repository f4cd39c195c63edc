# src/todo_sync/core/controller.py

"""
Mutation-and-reconciliation controller.

Keeps LocalCache consistent with the remote TaskStore:
- toggle / rename / delete: call the store, patch the cache only after success,
- create: ask the external workflow, then re-fetch and replace the cache
  wholesale (no locally fabricated rows),
- every store failure stops here: logged, turned into one user-facing message
  in last_error, never re-raised.
"""

from __future__ import annotations

import asyncio
import logging

from . import errors
from .cache import LocalCache
from .edit_session import EditSession
from .errors import StoreError
from .models import Identity, Task
from .ports import TaskStore

logger = logging.getLogger(__name__)


class MutationController:
    def __init__(
        self,
        store: TaskStore,
        identity: Identity | None,
        *,
        cache: LocalCache | None = None,
        edit_session: EditSession | None = None,
    ) -> None:
        self.store = store
        self.identity = identity
        self.cache = cache if cache is not None else LocalCache(identity.user_id if identity else "")
        self.edit_session = edit_session if edit_session is not None else EditSession()

        self.last_error: str | None = None
        self.draft: str = ""
        self.loading: bool = False

        # One mutation at a time, even if the UI fires re-entrant triggers.
        self._lock = asyncio.Lock()

    # ---- helpers ----

    def _fail(self, op: str, message: str, exc: StoreError) -> None:
        logger.warning("%s failed (%s): %s", op, exc.kind, exc)
        self.last_error = message

    async def _fetch_into_cache(self, identity: Identity) -> bool:
        self.loading = True
        try:
            tasks = await self.store.list_tasks(identity)
        except StoreError as e:
            self._fail("list", errors.MSG_LOAD, e)
            return False
        finally:
            self.loading = False
        self.cache.replace_all(tasks)
        return True

    # ---- read path ----

    async def load(self) -> bool:
        """Initial fetch (also used by /refresh)."""
        identity = self.identity
        if identity is None:
            return False
        async with self._lock:
            ok = await self._fetch_into_cache(identity)
            if ok:
                self.last_error = None
                logger.info("Loaded %d tasks for user=%s", len(self.cache), identity.user_id)
            return ok

    refresh = load

    # ---- mutations ----

    async def create(self, title: str | None = None) -> bool:
        """
        Request creation through the external workflow.

        Acceptance only means "delivered": the row shows up after the re-fetch
        if the workflow has already committed it, otherwise on a later refresh.
        The draft is consumed only when the title was taken from it.
        """
        identity = self.identity
        from_draft = title is None
        if from_draft:
            title = self.draft
        if identity is None or not title.strip():
            return False

        async with self._lock:
            try:
                await self.store.request_creation(identity, title)
            except StoreError as e:
                self._fail("create", errors.MSG_CREATE, e)
                return False

            if from_draft:
                self.draft = ""
            logger.info("Creation accepted for user=%s; re-fetching", identity.user_id)

            if not await self._fetch_into_cache(identity):
                return False
            self.last_error = None
            return True

    async def toggle(self, task: Task) -> bool:
        identity = self.identity
        if identity is None:
            return False
        new_value = not task.is_complete

        async with self._lock:
            try:
                await self.store.set_completion(identity, task.id, new_value)
            except StoreError as e:
                self._fail("toggle", errors.MSG_TOGGLE, e)
                return False

            self.cache.patch_completion(task.id, new_value)
            self.last_error = None
            logger.debug("Task id=%s is_complete=%s", task.id, new_value)
            return True

    async def rename(self, task_id: int, new_title: str) -> bool:
        identity = self.identity
        if identity is None:
            return False

        async with self._lock:
            try:
                await self.store.rename(identity, task_id, new_title)
            except StoreError as e:
                # Edit session stays as-is so the typed text is not lost.
                self._fail("rename", errors.MSG_RENAME, e)
                return False

            self.cache.patch_title(task_id, new_title)
            self.edit_session.clear_if(task_id)
            self.last_error = None
            logger.debug("Task id=%s renamed", task_id)
            return True

    async def delete(self, task_id: int) -> bool:
        identity = self.identity
        if identity is None:
            return False

        async with self._lock:
            try:
                await self.store.delete(identity, task_id)
            except StoreError as e:
                self._fail("delete", errors.MSG_DELETE, e)
                return False

            self.cache.remove(task_id)
            self.edit_session.clear_if(task_id)
            self.last_error = None
            logger.debug("Task id=%s deleted", task_id)
            return True

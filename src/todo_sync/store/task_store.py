# src/todo_sync/store/task_store.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.errors import (
    ConfigMissingError,
    NotFoundError,
    TransportError,
    UnauthorizedError,
)
from ..core.models import Identity, Task
from ..core.ports import CreationWorkflow

logger = logging.getLogger(__name__)


class RemoteTaskStore:
    """
    PostgREST-backed task store (Supabase "todos" table).

    Row-level reads are filtered by user_id. Writes are addressed by primary
    key; set_completion always adds the owner filter, rename/delete add it
    only when strict_owner_scope is on (the default).

    Writes ask for return=representation so an empty result can be reported
    as NotFound instead of a silent no-op.

    Creation is not done here: request_creation() hands the title to the
    injected CreationWorkflow.
    """

    def __init__(
        self,
        *,
        rest_url: str,
        api_key: str | None,
        table: str = "todos",
        workflow: CreationWorkflow | None = None,
        strict_owner_scope: bool = True,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base = f"{rest_url.rstrip('/')}/{table}"
        self._api_key = api_key or ""
        self._workflow = workflow
        self.strict_owner_scope = strict_owner_scope
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None
        logger.info(
            "RemoteTaskStore ready table=%s strict_owner_scope=%s", table, strict_owner_scope
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
        closer = getattr(self._workflow, "aclose", None)
        if closer is not None:
            await closer()

    # ---- low-level helpers ----

    def _headers(self, identity: Identity, *, representation: bool = False) -> dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {identity.access_token or self._api_key}",
        }
        if representation:
            headers["Prefer"] = "return=representation"
        return headers

    def _scope(self, identity: Identity, task_id: int, *, owner: bool) -> dict[str, str]:
        params = {"id": f"eq.{task_id}"}
        if owner:
            params["user_id"] = f"eq.{identity.user_id}"
        return params

    async def _request(
        self,
        method: str,
        identity: Identity,
        *,
        params: dict[str, str],
        json: dict[str, Any] | None = None,
        representation: bool = False,
    ) -> Any:
        try:
            resp = await self._client.request(
                method,
                self._base,
                params=params,
                json=json,
                headers=self._headers(identity, representation=representation),
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {self._base} failed: {e}") from e

        if resp.status_code in (401, 403):
            raise UnauthorizedError(f"{method} rejected with HTTP {resp.status_code}")
        if resp.status_code == 404:
            raise NotFoundError(f"{method} returned HTTP 404")
        if not resp.is_success:
            raise TransportError(f"{method} returned HTTP {resp.status_code}")

        if not resp.content:
            return []
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError("Store returned a non-JSON body") from e

    @staticmethod
    def _rows(data: Any) -> list[dict[str, Any]]:
        if not isinstance(data, list):
            raise TransportError("Store returned an unexpected payload")
        return [r for r in data if isinstance(r, dict)]

    # ---- public API ----

    async def list_tasks(self, identity: Identity) -> list[Task]:
        data = await self._request(
            "GET",
            identity,
            params={"select": "*", "user_id": f"eq.{identity.user_id}", "order": "id.asc"},
        )
        try:
            tasks = [Task.from_row(r) for r in self._rows(data)]
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed task row: {e}") from e
        logger.debug("Listed %d tasks user=%s", len(tasks), identity.user_id)
        return tasks

    async def set_completion(self, identity: Identity, task_id: int, value: bool) -> None:
        data = await self._request(
            "PATCH",
            identity,
            params=self._scope(identity, task_id, owner=True),
            json={"is_complete": value},
            representation=True,
        )
        if not self._rows(data):
            raise NotFoundError(f"Task id={task_id} not found for this user")

    async def rename(self, identity: Identity, task_id: int, new_title: str) -> None:
        data = await self._request(
            "PATCH",
            identity,
            params=self._scope(identity, task_id, owner=self.strict_owner_scope),
            json={"title": new_title},
            representation=True,
        )
        if not self._rows(data):
            raise NotFoundError(f"Task id={task_id} not found")

    async def delete(self, identity: Identity, task_id: int) -> None:
        data = await self._request(
            "DELETE",
            identity,
            params=self._scope(identity, task_id, owner=self.strict_owner_scope),
            representation=True,
        )
        if not self._rows(data):
            if self.strict_owner_scope:
                raise NotFoundError(f"Task id={task_id} not found for this user")
            logger.debug("Delete of id=%s matched no rows", task_id)

    async def request_creation(self, identity: Identity, title: str) -> None:
        if self._workflow is None:
            raise ConfigMissingError("No creation workflow configured.")
        await self._workflow.trigger(title=title, user_email=identity.email)
        logger.info("Creation requested user=%s", identity.user_id)

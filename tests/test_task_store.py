# tests/test_task_store.py

from __future__ import annotations

import json

import httpx
import pytest

from todo_sync.core.errors import (
    ConfigMissingError,
    NotFoundError,
    TransportError,
    UnauthorizedError,
)
from todo_sync.core.models import Identity
from todo_sync.store.task_store import RemoteTaskStore
from todo_sync.store.webhook import CreationWebhook

REST = "https://db.example/rest/v1"
HOOK = "https://hooks.example/webhook/create"

IDENT = Identity(user_id="u1", email="u1@example.com", access_token="tok")

ROW = {
    "id": 1,
    "title": "Buy milk",
    "is_complete": False,
    "created_at": "2024-05-01T10:00:00+00:00",
    "user_id": "u1",
}


class Recorder:
    """MockTransport handler: records requests, replies from a queue."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)


def _store(handler, *, strict: bool = True, webhook_url: str | None = HOOK) -> RemoteTaskStore:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RemoteTaskStore(
        rest_url=REST,
        api_key="anon",
        table="todos",
        workflow=CreationWebhook(webhook_url, client=client),
        strict_owner_scope=strict,
        client=client,
    )


@pytest.mark.asyncio
async def test_list_filters_by_owner_and_parses_rows() -> None:
    rec = Recorder(httpx.Response(200, json=[ROW]))
    store = _store(rec)

    tasks = await store.list_tasks(IDENT)

    assert [t.title for t in tasks] == ["Buy milk"]
    req = rec.requests[0]
    assert req.method == "GET"
    assert req.url.path == "/rest/v1/todos"
    assert req.url.params["user_id"] == "eq.u1"
    assert req.headers["Authorization"] == "Bearer tok"
    assert req.headers["apikey"] == "anon"


@pytest.mark.asyncio
async def test_set_completion_is_owner_scoped_and_checks_rows() -> None:
    rec = Recorder(
        httpx.Response(200, json=[dict(ROW, is_complete=True)]),
        httpx.Response(200, json=[]),
    )
    store = _store(rec, strict=False)

    await store.set_completion(IDENT, 1, True)
    req = rec.requests[0]
    assert req.method == "PATCH"
    assert req.url.params["id"] == "eq.1"
    assert req.url.params["user_id"] == "eq.u1"
    assert req.headers["Prefer"] == "return=representation"
    assert json.loads(req.content) == {"is_complete": True}

    with pytest.raises(NotFoundError):
        await store.set_completion(IDENT, 1, False)


@pytest.mark.asyncio
async def test_rename_and_delete_owner_scope_follows_flag() -> None:
    rec = Recorder(
        httpx.Response(200, json=[dict(ROW, title="B")]),
        httpx.Response(200, json=[ROW]),
    )
    strict = _store(rec, strict=True)
    await strict.rename(IDENT, 1, "B")
    await strict.delete(IDENT, 1)
    assert all(r.url.params.get("user_id") == "eq.u1" for r in rec.requests)

    rec2 = Recorder(
        httpx.Response(200, json=[dict(ROW, title="B")]),
        httpx.Response(200, json=[ROW]),
    )
    loose = _store(rec2, strict=False)
    await loose.rename(IDENT, 1, "B")
    await loose.delete(IDENT, 1)
    assert all("user_id" not in r.url.params for r in rec2.requests)


@pytest.mark.asyncio
async def test_delete_with_no_match() -> None:
    strict = _store(Recorder(httpx.Response(200, json=[])), strict=True)
    with pytest.raises(NotFoundError):
        await strict.delete(IDENT, 42)

    loose = _store(Recorder(httpx.Response(200, json=[])), strict=False)
    await loose.delete(IDENT, 42)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "exc"),
    [(401, UnauthorizedError), (403, UnauthorizedError), (404, NotFoundError), (500, TransportError)],
)
async def test_http_status_maps_to_failure_kind(status: int, exc: type) -> None:
    store = _store(Recorder(httpx.Response(status)))
    with pytest.raises(exc):
        await store.list_tasks(IDENT)


@pytest.mark.asyncio
async def test_network_error_is_transport() -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    store = _store(boom)
    with pytest.raises(TransportError):
        await store.rename(IDENT, 1, "x")


@pytest.mark.asyncio
async def test_request_creation_posts_title_and_email() -> None:
    rec = Recorder(httpx.Response(200, text="ok"))
    store = _store(rec)

    await store.request_creation(IDENT, "Buy milk")

    req = rec.requests[0]
    assert req.method == "POST"
    assert str(req.url) == HOOK
    assert json.loads(req.content) == {"title": "Buy milk", "user_email": "u1@example.com"}


@pytest.mark.asyncio
async def test_request_creation_failures() -> None:
    missing = _store(Recorder(), webhook_url=None)
    with pytest.raises(ConfigMissingError):
        await missing.request_creation(IDENT, "x")

    rejected = _store(Recorder(httpx.Response(500)))
    with pytest.raises(TransportError):
        await rejected.request_creation(IDENT, "x")

    no_workflow = RemoteTaskStore(rest_url=REST, api_key="anon", workflow=None)
    with pytest.raises(ConfigMissingError):
        await no_workflow.request_creation(IDENT, "x")
    await no_workflow.aclose()

# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_sync.core.controller import MutationController
from todo_sync.core.models import Identity
from todo_sync.core.state import AppState

from .fakes import FakeSessionGate, FakeTaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-sync-test",
        data_dir=tmp_path,
        session_path=tmp_path / "session.json",
        store_url="https://example.supabase.co",
        creation_webhook_url="https://hooks.example/create",
        strict_owner_scope=True,
    )


@pytest.fixture()
def identity() -> Identity:
    return Identity(user_id="u1", email="u1@example.com", access_token="tok")


@pytest.fixture()
def store() -> FakeTaskStore:
    return FakeTaskStore()


@pytest.fixture()
def controller(store: FakeTaskStore, identity: Identity) -> MutationController:
    return MutationController(store, identity)


@pytest.fixture()
def state(settings: SimpleNamespace, store: FakeTaskStore, identity: Identity) -> AppState:
    """AppState with a resolved identity, wired with in-memory fakes."""
    return AppState(
        settings=settings,
        gate=FakeSessionGate(identity=identity),
        store=store,
        identity=identity,
        controller=MutationController(store, identity),
    )

# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from todo_sync.config import Settings


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch) -> None:
    monkeypatch.setattr("todo_sync.config._load_dotenv_if_available", lambda: None)
    for name in (
        "TODO_SYNC_STORE_URL",
        "SUPABASE_URL",
        "TODO_SYNC_CREATION_WEBHOOK_URL",
        "N8N_PRODUCTION_URL",
        "TODO_SYNC_STRICT_OWNER_SCOPE",
        "TODO_SYNC_DATA_DIR",
        "TODO_SYNC_SESSION_PATH",
        "TODO_SYNC_HTTP_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_need_no_secrets() -> None:
    s = Settings.from_env()
    assert s.creation_webhook_url is None
    assert s.strict_owner_scope is True
    assert s.store_table == "todos"
    assert s.session_path == Path(".local/todo_sync") / "session.json"


def test_env_overrides_and_fallback_names(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://db.example/")
    monkeypatch.setenv("N8N_PRODUCTION_URL", "https://hooks.example/create")
    monkeypatch.setenv("TODO_SYNC_STRICT_OWNER_SCOPE", "false")
    monkeypatch.setenv("TODO_SYNC_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODO_SYNC_HTTP_TIMEOUT_SECONDS", "oops")

    s = Settings.from_env()
    assert s.rest_url == "https://db.example/rest/v1"
    assert s.auth_url == "https://db.example/auth/v1"
    assert s.creation_webhook_url == "https://hooks.example/create"
    assert s.strict_owner_scope is False
    assert s.session_path == tmp_path / "session.json"
    assert s.http_timeout_seconds == 10.0

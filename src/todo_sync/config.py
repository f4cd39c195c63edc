# src/todo_sync/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the console reports what is missing).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "TODO_SYNC"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    console_enabled: bool

    # ---- Remote store (PostgREST / Supabase) ----
    store_url: str
    store_api_key: Optional[str]
    store_table: str
    strict_owner_scope: bool
    http_timeout_seconds: float

    # ---- Creation workflow ----
    creation_webhook_url: Optional[str]

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    session_path: Path

    @property
    def rest_url(self) -> str:
        return f"{self.store_url.rstrip('/')}/rest/v1"

    @property
    def auth_url(self) -> str:
        return f"{self.store_url.rstrip('/')}/auth/v1"

    @staticmethod
    def from_env() -> "Settings":
        _load_dotenv_if_available()

        app_name = _env(_k("APP_NAME"), "todo-sync")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        store_url = (_first_env(_k("STORE_URL"), "SUPABASE_URL", default="") or "").strip()
        store_api_key = _first_env(_k("STORE_API_KEY"), "SUPABASE_ANON_KEY", default=None)
        store_table = _env(_k("STORE_TABLE"), "todos")
        strict_owner_scope = _env_bool(_k("STRICT_OWNER_SCOPE"), True)
        http_timeout_seconds = _env_float(_k("HTTP_TIMEOUT_SECONDS"), 10.0)

        # Missing URL is not an error here: only the create path fails on it.
        creation_webhook_url = _first_env(
            _k("CREATION_WEBHOOK_URL"), "N8N_PRODUCTION_URL", default=None
        )

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo_sync"))
        session_path = _env_path(_k("SESSION_PATH"), data_dir / "session.json")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            store_url=store_url,
            store_api_key=store_api_key,
            store_table=store_table,
            strict_owner_scope=strict_owner_scope,
            http_timeout_seconds=http_timeout_seconds,
            creation_webhook_url=creation_webhook_url,
            data_dir=data_dir,
            session_path=session_path,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS

# src/todo_sync/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations (session gate, remote store, creation
  webhook) into AppState,
- opens the session: resolves the identity and performs the first fetch.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.controller import MutationController
from ..core.errors import MSG_UNAUTHENTICATED
from ..core.state import AppState
from ..session.gate import SupabaseSessionGate
from ..store.task_store import RemoteTaskStore
from ..store.webhook import CreationWebhook

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.session_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if not settings.creation_webhook_url:
        # Not fatal: only the create path depends on it.
        logger.warning("Creation webhook URL is not configured; adding tasks will fail.")

    webhook = CreationWebhook(settings.creation_webhook_url, timeout=settings.http_timeout_seconds)
    store = RemoteTaskStore(
        rest_url=settings.rest_url,
        api_key=settings.store_api_key,
        table=settings.store_table,
        workflow=webhook,
        strict_owner_scope=settings.strict_owner_scope,
        timeout=settings.http_timeout_seconds,
    )
    gate = SupabaseSessionGate(
        session_path=settings.session_path,
        auth_url=settings.auth_url,
        api_key=settings.store_api_key,
        timeout=settings.http_timeout_seconds,
    )
    return AppState(settings=settings, gate=gate, store=store)


async def open_session(state: AppState) -> bool:
    """
    Resolve the identity once and load the task list.

    Unauthenticated: nothing else is wired, so no store call can happen.
    """
    identity = await state.gate.resolve()
    if identity is None:
        state.identity = None
        state.controller = None
        state.notice = MSG_UNAUTHENTICATED
        return False

    state.identity = identity
    state.notice = None
    state.controller = MutationController(state.store, identity)
    await state.controller.load()
    return True


async def close_state(state: AppState) -> None:
    """Best-effort shutdown of HTTP clients (no exceptions should escape)."""
    for obj in (state.store, state.gate):
        closer = getattr(obj, "aclose", None)
        if closer is None:
            continue
        try:
            await closer()
        except Exception:
            logger.debug("aclose failed for %r", obj, exc_info=True)

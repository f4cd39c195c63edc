# src/todo_sync/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .controller import MutationController
from .models import Identity
from .ports import SessionGate, TaskStore


@dataclass
class AppState:
    # Settings are kept on the state so connectors/commands can read them.
    settings: Any

    gate: SessionGate
    store: TaskStore

    # None until the gate resolved an identity; stays None when unauthenticated.
    identity: Identity | None = None
    controller: MutationController | None = None

    # User-facing notice for the unauthenticated / signed-out case.
    notice: str | None = None
    signed_out: bool = False


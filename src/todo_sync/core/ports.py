# src/todo_sync/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The controller depends on Protocols instead of concrete implementations.
This keeps the remote store / creation workflow / session backend swappable
and makes testing easier.

Every store call takes the Identity explicitly; nothing reads ambient
session state.
"""

from typing import Protocol

from .models import Identity, Task


class SessionGate(Protocol):
    """
    Resolves the current session.

    resolve() returns None when there is no usable session. Backend or
    transport failures must also come back as None (fail closed).
    """

    async def resolve(self) -> Identity | None: ...

    async def sign_out(self, identity: Identity) -> None: ...


class TaskStore(Protocol):
    """
    Remote task collection scoped by Identity.

    Failures are raised as core.errors.StoreError subclasses.
    """

    async def list_tasks(self, identity: Identity) -> list[Task]: ...

    async def set_completion(self, identity: Identity, task_id: int, value: bool) -> None: ...

    async def rename(self, identity: Identity, task_id: int, new_title: str) -> None: ...

    async def delete(self, identity: Identity, task_id: int) -> None: ...

    # Not an insert: hands the title to the external workflow. Returning
    # normally only means the request was delivered.
    async def request_creation(self, identity: Identity, title: str) -> None: ...


class CreationWorkflow(Protocol):
    """External automation that performs the actual insert out of band."""

    async def trigger(self, *, title: str, user_email: str) -> None: ...

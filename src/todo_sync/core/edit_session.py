# src/todo_sync/core/edit_session.py

from __future__ import annotations

"""
Single-slot edit state.

Modelled as a tagged variant (Idle | Editing) so an id can never be set
while the scratch text belongs to another task.
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .models import Task

if TYPE_CHECKING:
    from .controller import MutationController


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Editing:
    task_id: int
    scratch: str


EditState = Idle | Editing

IDLE = Idle()


class EditSession:
    def __init__(self) -> None:
        self.state: EditState = IDLE

    @property
    def is_editing(self) -> bool:
        return isinstance(self.state, Editing)

    @property
    def task_id(self) -> int | None:
        return self.state.task_id if isinstance(self.state, Editing) else None

    @property
    def scratch(self) -> str:
        return self.state.scratch if isinstance(self.state, Editing) else ""

    def begin_edit(self, task: Task) -> None:
        # Last writer wins: any in-progress edit is dropped.
        self.state = Editing(task_id=task.id, scratch=task.title)

    def update_scratch(self, text: str) -> None:
        if isinstance(self.state, Editing):
            self.state = replace(self.state, scratch=text)

    def clear(self) -> None:
        self.state = IDLE

    def cancel(self) -> None:
        self.clear()

    def clear_if(self, task_id: int) -> None:
        if self.task_id == task_id:
            self.clear()

    async def commit(self, controller: MutationController) -> bool:
        """
        Hand the scratch title to controller.rename().

        No-op (False) when idle or the scratch is blank. The controller clears
        this session only when the rename succeeds.
        """
        st = self.state
        if not isinstance(st, Editing) or not st.scratch.strip():
            return False
        return await controller.rename(st.task_id, st.scratch)

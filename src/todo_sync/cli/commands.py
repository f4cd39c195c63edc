# src/todo_sync/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.controller import MutationController
from ..core.errors import MSG_SIGN_OUT, MSG_UNAUTHENTICATED, StoreError
from ..core.models import Task
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, str], Awaitable[str]]
CommandHandler3 = Callable[[AppState, str, CommandEmitter | None], Awaitable[str]]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Only the command name is split off; handlers get the rest of the line
        untouched so titles keep their spacing.
        """
        if not line.startswith("/"):
            return None

        name, _, rest = line[1:].partition(" ")
        name = name.strip().lower()
        if not name:
            return "Empty command. Use /help to list available commands."

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return await h3(state, rest, emit)

        h2 = cast(CommandHandler2, handler)
        return await h2(state, rest)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def render_tasks(ctrl: MutationController) -> str:
    """Plain-text listing of the cache, numbered from 1."""
    lines: list[str] = []
    if ctrl.last_error:
        lines.append(f"! {ctrl.last_error}")
    if ctrl.loading:
        lines.append("Loading tasks...")
        return "\n".join(lines)

    tasks = ctrl.cache.snapshot()
    if not tasks:
        lines.append("No tasks!")
        return "\n".join(lines)

    editing_id = ctrl.edit_session.task_id
    for pos, t in enumerate(tasks, start=1):
        if t.id == editing_id:
            lines.append(f"{pos:>3}. [editing] {ctrl.edit_session.scratch}")
            continue
        mark = "x" if t.is_complete else " "
        status = "DONE" if t.is_complete else "NOT DONE"
        lines.append(f"{pos:>3}. [{mark}] {t.title}  ({status})")
    return "\n".join(lines)


def _task_at(ctrl: MutationController, rest: str) -> Task | None:
    words = rest.split()
    if not words:
        return None
    try:
        pos = int(words[0])
    except ValueError:
        return None
    tasks = ctrl.cache.snapshot()
    if pos < 1 or pos > len(tasks):
        return None
    return tasks[pos - 1]


async def cmd_help(state: AppState, rest: str) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, rest: str) -> str:
    if state.controller is None:
        return state.notice or MSG_UNAUTHENTICATED
    return render_tasks(state.controller)


async def cmd_refresh(state: AppState, rest: str) -> str:
    ctrl = state.controller
    if ctrl is None:
        return state.notice or MSG_UNAUTHENTICATED
    await ctrl.refresh()
    return render_tasks(ctrl)


async def cmd_add(state: AppState, rest: str) -> str:
    """
    /add <title>   -> request creation through the workflow, then re-fetch

    The new task only shows up once the workflow has committed it; use
    /refresh later if it is not listed yet.
    """
    ctrl = state.controller
    if ctrl is None:
        return state.notice or MSG_UNAUTHENTICATED
    ctrl.draft = rest
    if not ctrl.draft.strip():
        return "Usage: /add <title>"
    await ctrl.create()
    return render_tasks(ctrl)


async def cmd_done(state: AppState, rest: str) -> str:
    ctrl = state.controller
    if ctrl is None:
        return state.notice or MSG_UNAUTHENTICATED
    task = _task_at(ctrl, rest)
    if task is None:
        return "Usage: /done <number>"
    await ctrl.toggle(task)
    return render_tasks(ctrl)


async def cmd_edit(state: AppState, rest: str) -> str:
    ctrl = state.controller
    if ctrl is None:
        return state.notice or MSG_UNAUTHENTICATED
    task = _task_at(ctrl, rest)
    if task is None:
        return "Usage: /edit <number>"
    ctrl.edit_session.begin_edit(task)
    return f"Editing: {task.title}\nUse /text <new title> then /save (or /cancel)."


async def cmd_text(state: AppState, rest: str) -> str:
    ctrl = state.controller
    if ctrl is None:
        return state.notice or MSG_UNAUTHENTICATED
    if not ctrl.edit_session.is_editing:
        return "Nothing is being edited. Use /edit <number> first."
    ctrl.edit_session.update_scratch(rest)
    return render_tasks(ctrl)


async def cmd_save(state: AppState, rest: str) -> str:
    ctrl = state.controller
    if ctrl is None:
        return state.notice or MSG_UNAUTHENTICATED
    if not ctrl.edit_session.is_editing:
        return "Nothing is being edited."
    await ctrl.edit_session.commit(ctrl)
    return render_tasks(ctrl)


async def cmd_cancel(state: AppState, rest: str) -> str:
    ctrl = state.controller
    if ctrl is None:
        return state.notice or MSG_UNAUTHENTICATED
    ctrl.edit_session.cancel()
    return render_tasks(ctrl)


async def cmd_delete(state: AppState, rest: str) -> str:
    ctrl = state.controller
    if ctrl is None:
        return state.notice or MSG_UNAUTHENTICATED
    task = _task_at(ctrl, rest)
    if task is None:
        return "Usage: /delete <number>"
    await ctrl.delete(task.id)
    return render_tasks(ctrl)


async def cmd_status(state: AppState, rest: str) -> str:
    settings = state.settings
    who = state.identity.email if state.identity else "(not signed in)"
    count = len(state.controller.cache) if state.controller else 0
    webhook = "configured" if getattr(settings, "creation_webhook_url", None) else "MISSING"
    strict = "ON" if getattr(settings, "strict_owner_scope", True) else "OFF"
    return (
        "Status:\n"
        f"  User: {who}\n"
        f"  Tasks cached: {count}\n"
        f"  Store: {getattr(settings, 'store_url', '') or '(not set)'}\n"
        f"  Creation webhook: {webhook}\n"
        f"  Owner-scoped rename/delete: {strict}"
    )


async def cmd_signout(
    state: AppState,
    rest: str,
    emit: CommandEmitter | None = None,
) -> str:
    identity = state.identity
    if identity is None:
        return state.notice or MSG_UNAUTHENTICATED

    if emit:
        with contextlib.suppress(Exception):
            emit("Signing out...")

    try:
        await state.gate.sign_out(identity)
    except StoreError as e:
        logger.warning("Sign out failed: %s", e)
        if state.controller is not None:
            state.controller.last_error = MSG_SIGN_OUT
        return MSG_SIGN_OUT

    state.identity = None
    state.controller = None
    state.signed_out = True
    state.notice = MSG_UNAUTHENTICATED
    return "Signed out."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Re-fetch the task list from the store.")
registry.register("add", cmd_add, help_text="Add a task: /add <title>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <number>.", aliases=["toggle"])
registry.register("edit", cmd_edit, help_text="Start editing a task title: /edit <number>.")
registry.register("text", cmd_text, help_text="Set the title being edited: /text <new title>.")
registry.register("save", cmd_save, help_text="Save the edited title.")
registry.register("cancel", cmd_cancel, help_text="Stop editing without saving.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <number>.", aliases=["rm"])
registry.register("status", cmd_status, help_text="Show session and store settings.")
registry.register("signout", cmd_signout, help_text="Sign out and leave the task list.", aliases=["logout"])

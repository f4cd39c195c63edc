# src/todo_sync/core/errors.py

from __future__ import annotations

"""
Failure taxonomy shared by the adapters and the controller.

Adapters raise these; MutationController catches them at its operation
boundary and turns them into a single user-facing message.
"""

from enum import StrEnum


class FailureKind(StrEnum):
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    CONFIG_MISSING = "config_missing"
    TRANSPORT = "transport"


class StoreError(Exception):
    kind: FailureKind = FailureKind.TRANSPORT

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.__class__.__name__)


class NotFoundError(StoreError):
    kind = FailureKind.NOT_FOUND


class UnauthorizedError(StoreError):
    kind = FailureKind.UNAUTHORIZED


class ConfigMissingError(StoreError):
    kind = FailureKind.CONFIG_MISSING


class TransportError(StoreError):
    kind = FailureKind.TRANSPORT


# User-facing messages, one per operation.
MSG_LOAD = "Error loading tasks."
MSG_CREATE = "Error adding the task."
MSG_TOGGLE = "Error while updating the task."
MSG_RENAME = "Error while trying to update the task."
MSG_DELETE = "Error deleting the task."
MSG_SIGN_OUT = "Error signing out."
MSG_UNAUTHENTICATED = "Log in to see your tasks."

# src/todo_sync/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Authenticated actor for the current session.

    The access token is carried along so adapters can authorize their
    requests, but it never shows up in repr/logs and is not part of equality.
    """

    user_id: str
    email: str
    access_token: str = field(default="", repr=False, compare=False)


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    is_complete: bool
    created_at: datetime | None
    user_id: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Task:
        return cls(
            id=int(row["id"]),
            title=str(row.get("title") or ""),
            is_complete=bool(row.get("is_complete", False)),
            created_at=_parse_ts(row.get("created_at")),
            user_id=str(row.get("user_id") or ""),
        )

    def with_completion(self, value: bool) -> Task:
        return replace(self, is_complete=value)

    def with_title(self, title: str) -> Task:
        return replace(self, title=title)


def _parse_ts(raw: Any) -> datetime | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw
    s = str(raw).strip()
    # PostgREST emits "+00:00" offsets, but older servers send a bare "Z".
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None

# src/todo_sync/session/gate.py

from __future__ import annotations

"""
Session gate backed by a locally stored Supabase session.

Sign-in happens elsewhere; whatever performs it writes a JSON file with at
least {"access_token": "..."}. resolve() validates that token against the
auth server and fails closed: a missing file, bad JSON, a rejected token and
a network error all come back as None.
"""

import contextlib
import json
import logging
from pathlib import Path
from typing import Any

import httpx

from ..core.errors import TransportError
from ..core.models import Identity

logger = logging.getLogger(__name__)


class SupabaseSessionGate:
    def __init__(
        self,
        *,
        session_path: str | Path,
        auth_url: str,
        api_key: str | None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.session_path = Path(session_path)
        self._auth_url = auth_url.rstrip("/")
        self._api_key = api_key or ""
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _read_token(self) -> str | None:
        if not self.session_path.exists():
            return None
        try:
            data: Any = json.loads(self.session_path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Unreadable session file %s", self.session_path)
            return None
        if not isinstance(data, dict):
            return None
        token = data.get("access_token")
        return token if isinstance(token, str) and token.strip() else None

    def _headers(self, token: str) -> dict[str, str]:
        return {"apikey": self._api_key, "Authorization": f"Bearer {token}"}

    async def resolve(self) -> Identity | None:
        token = self._read_token()
        if token is None:
            logger.info("No stored session")
            return None

        try:
            resp = await self._client.get(f"{self._auth_url}/user", headers=self._headers(token))
        except httpx.HTTPError:
            logger.warning("Session check failed (transport); treating as signed out", exc_info=True)
            return None

        if not resp.is_success:
            logger.info("Stored session rejected (HTTP %s)", resp.status_code)
            return None

        try:
            user = resp.json()
        except ValueError:
            return None
        if not isinstance(user, dict) or not user.get("id"):
            return None

        identity = Identity(
            user_id=str(user["id"]),
            email=str(user.get("email") or ""),
            access_token=token,
        )
        logger.info("Session resolved user=%s", identity.user_id)
        return identity

    async def sign_out(self, identity: Identity) -> None:
        """Revoke the token remotely, then forget the local session."""
        try:
            resp = await self._client.post(
                f"{self._auth_url}/logout",
                headers=self._headers(identity.access_token),
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Logout failed: {e}") from e
        if not resp.is_success:
            raise TransportError(f"Logout returned HTTP {resp.status_code}")

        with contextlib.suppress(FileNotFoundError):
            self.session_path.unlink()
        logger.info("Signed out user=%s", identity.user_id)

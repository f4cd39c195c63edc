# src/todo_sync/store/webhook.py

from __future__ import annotations

import logging

import httpx

from ..core.errors import ConfigMissingError, TransportError

logger = logging.getLogger(__name__)


class CreationWebhook:
    """
    Client for the external creation workflow (n8n-style webhook).

    One POST of {"title", "user_email"}; any non-2xx status or network error
    is a TransportError. The response body is ignored: the only output is
    accepted / rejected. Single attempt, no retries.
    """

    def __init__(
        self,
        url: str | None,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = (url or "").strip() or None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def trigger(self, *, title: str, user_email: str) -> None:
        if not self.url:
            raise ConfigMissingError("Creation webhook URL is not defined.")

        try:
            resp = await self._client.post(
                self.url,
                json={"title": title, "user_email": user_email},
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Creation webhook call failed: {e}") from e

        if not resp.is_success:
            raise TransportError(f"Creation webhook returned HTTP {resp.status_code}")

        logger.debug("Creation webhook accepted (status=%s)", resp.status_code)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

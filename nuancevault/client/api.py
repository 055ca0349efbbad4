"""Thin async wrapper over the gamification HTTP routes."""
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

GAMIFICATION_PATH = "/api/tools/nuancevault/gamification"


class GamificationSyncError(Exception):
    """The server could not be reached or rejected the request."""


class GamificationAPI:
    def __init__(self, client: httpx.AsyncClient, token: str | None = None):
        self.client = client
        self.token = token

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        try:
            response = await self.client.request(method, path, headers=self._headers(), **kwargs)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise GamificationSyncError(str(exc)) from exc
        if not isinstance(body, dict):
            raise GamificationSyncError(f"{method} {path}: unexpected response body")
        return body

    async def get_gamification(self) -> dict[str, Any] | None:
        body = await self._request("GET", GAMIFICATION_PATH)
        return body.get("data")

    async def record_practice(self, set_id: str, was_correct: bool) -> dict[str, Any]:
        """Returns the full response body: ``data`` (record) and ``xp_gain``."""
        return await self._request(
            "POST",
            f"{GAMIFICATION_PATH}/practice",
            json={"set_id": set_id, "was_correct": was_correct},
        )

    async def reset_gamification(self) -> None:
        await self._request("POST", f"{GAMIFICATION_PATH}/reset")

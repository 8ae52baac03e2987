"""
Async HTTP client for the StaffHub REST API.

Deliberately thin: it issues the request and raises the raw httpx errors
(``TransportError`` / ``HTTPStatusError``) so the service façades can
classify them.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from staffhub.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class ApiClient:
    """Wraps an ``httpx.AsyncClient`` rooted at ``API_BASE_URL``."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        config: Settings | None = None,
    ) -> None:
        config = config or default_settings
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/") + "/"
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else config.REQUEST_TIMEOUT_SECONDS,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (``None`` when empty)."""
        logger.debug("%s %s%s", method, self.base_url, path.lstrip("/"))
        response = await self._http.request(method, path.lstrip("/"), json=json, params=params)
        response.raise_for_status()
        if not response.content:
            return None
        if response.headers.get("Content-Type", "").startswith("application/json"):
            return response.json()
        return response.text

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    async def aclose(self) -> None:
        await self._http.aclose()


__all__ = ["ApiClient"]

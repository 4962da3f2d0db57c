"""Client for the optional remote persistence endpoint."""

import logging
import time
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class PersistenceClient:
    """
    Async client for the project/render store.

    Every failure is absorbed: the client flips to offline, logs the
    transition once and the call returns None. While offline, calls are
    skipped until ``check_health`` succeeds again.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.online = False

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        )

    def _go_offline(self, error: Exception) -> None:
        if self.online:
            logger.warning(f"Persistence API unavailable, switching to offline mode: {error}")
        self.online = False

    async def _request(self, method: str, path: str, **kwargs) -> Optional[Any]:
        if not self.online:
            return None
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._go_offline(e)
            return None

    @property
    def status_label(self) -> str:
        return "API: online" if self.online else "API: offline"

    async def check_health(self) -> bool:
        """Check the endpoint and update the online indicator."""
        try:
            async with self._client() as client:
                response = await client.get("/health")
                response.raise_for_status()
        except httpx.HTTPError as e:
            if self.online:
                self._go_offline(e)
            else:
                logger.info(f"Persistence API offline: {e}")
            return False

        if not self.online:
            logger.info("Persistence API connected")
        self.online = True
        return True

    async def save_project(self, document: dict) -> Optional[str]:
        """Store a native document; returns the project id."""
        data = await self._request("POST", "/projects", json=document)
        return data.get("projectId") if data else None

    async def get_project(self, project_id: str) -> Optional[dict]:
        return await self._request("GET", f"/projects/{project_id}")

    async def upload_export(self, format: str, data: Any, project_id: str = "demo") -> Optional[dict]:
        """Store an exported payload under a generated filename."""
        return await self._request(
            "POST",
            "/export",
            json={"format": format, "data": data, "projectId": project_id},
        )

    async def upload_render(
        self,
        data_url: str,
        project_id: str = "demo",
        timestamp: Optional[int] = None,
    ) -> Optional[dict]:
        """Store a base64 PNG data URL."""
        return await self._request(
            "POST",
            "/render",
            json={
                "image": data_url,
                "timestamp": timestamp if timestamp is not None else int(time.time() * 1000),
                "projectId": project_id,
            },
        )

    async def list_assets(self) -> Optional[dict]:
        """Catalog of placeable assets grouped by category."""
        return await self._request("GET", "/assets")

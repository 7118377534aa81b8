"""
Hosted Backend Client

Read-only client for the menu tables of the hosted backend's REST API.
"""

import logging
from typing import Any, Optional

import httpx

from ..errors import BackendError

logger = logging.getLogger(__name__)

MENU_SELECT = "*,variations(*),add_ons(*)"


class BackendClient:
    """Fetches raw menu rows from the hosted backend"""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize backend client.

        Args:
            base_url: Project URL of the hosted backend
            anon_key: Public API key sent with every request
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to stub the backend
        """
        self.base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {self._anon_key}",
            "Accept": "application/json",
        }

    async def _get(self, table: str, params: dict[str, str]) -> list[dict[str, Any]]:
        url = f"{self.base_url}/rest/v1/{table}"
        try:
            response = await self._http_client.get(url, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Backend request to {table} failed: {e}")
            raise BackendError(f"Could not reach backend: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Backend request failed: {response.status_code} - {response.text}")
            raise BackendError(f"Backend returned {response.status_code} for {table}")

        return response.json()

    async def fetch_menu_rows(self) -> list[dict[str, Any]]:
        """Menu items with their variations and add-ons, in display order"""
        return await self._get(
            "menu_items",
            {"select": MENU_SELECT, "order": "sort_order.asc.nullslast"},
        )

    async def fetch_category_rows(self) -> list[dict[str, Any]]:
        """Menu categories, including inactive ones, in display order"""
        return await self._get(
            "categories",
            {"select": "*", "order": "sort_order.asc"},
        )

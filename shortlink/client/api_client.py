"""HTTP client for the short link service."""

import logging
from typing import Any, Dict, Optional

import httpx

from ..common.url_builder import build_short_url


class ClientError(Exception):
    """Raised when the service answers with a non-success status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ShortLinkClient:
    """Async client for the create and analytics endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:8001",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize client.

        Args:
            base_url: Base URL of the running service
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. ASGITransport in tests)
            logger: Optional logger
        """
        self.base_url = base_url.rstrip("/")
        self.logger = logger or logging.getLogger(__name__)
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ShortLinkClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def short_url(self, short_id: str) -> str:
        """Public short URL for an ID."""
        return build_short_url(short_id=short_id, base_url=self.base_url)

    async def shorten(self, url: str) -> str:
        """Create a short link and return its ID."""
        response = await self._client.post("/url", json={"url": url})
        data = self._json_or_raise(response)
        self.logger.debug(f"Shortened {url} -> {data['id']}")
        return data["id"]

    async def analytics(self, short_id: str) -> Dict[str, Any]:
        """Fetch ``{"totalClicks": n, "analytics": [...]}`` for a short ID."""
        response = await self._client.get(f"/url/analytics/{short_id}")
        return self._json_or_raise(response)

    @staticmethod
    def _json_or_raise(response: httpx.Response) -> Dict[str, Any]:
        if response.is_success:
            return response.json()
        try:
            message = response.json().get("error") or response.text
        except ValueError:
            message = response.text
        raise ClientError(response.status_code, message)

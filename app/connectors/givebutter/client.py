"""ButterDish — Givebutter Page Client.

Fetches the public campaign page. No retries: a miss surfaces to the
caller's fallback path.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from app.config import settings
from app.core.errors import UpstreamError, UpstreamUnreachable
from app.core.logging import get_logger

logger = get_logger("givebutter.client")


@dataclass(frozen=True)
class FetchedPage:
    html: str
    status_code: int


class GivebutterClient:
    """Async HTTP client for the public campaign page."""

    def __init__(
        self,
        campaign_url: str | None = None,
        user_agent: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.campaign_url = campaign_url or settings.campaign_url
        self.user_agent = user_agent or settings.user_agent
        self._owns_client = http_client is None
        self._client: Optional[httpx.AsyncClient] = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=settings.http_timeout)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()

    async def fetch_page(self) -> FetchedPage:
        """GET the campaign page, bypassing any intermediate cache."""
        client = await self._get_client()
        headers = {
            "User-Agent": self.user_agent,
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        }
        try:
            resp = await client.get(self.campaign_url, headers=headers)
        except httpx.RequestError as e:
            raise UpstreamUnreachable(f"Could not reach {self.campaign_url}: {e}") from e

        if not resp.is_success:
            logger.warning(
                f"Upstream page returned {resp.status_code}",
                extra={"status_code": resp.status_code},
            )
            raise UpstreamError(
                f"Failed to fetch: {resp.status_code} {resp.reason_phrase}".strip(),
                status_code=resp.status_code,
            )

        return FetchedPage(html=resp.text, status_code=resp.status_code)

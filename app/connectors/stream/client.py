"""ButterDish — Stream Activity Feed Bridge.

The campaign page embeds read credentials for its real-time activity feed.
When they are present the feed can be queried directly instead of parsing
the activity widget.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
from bs4 import BeautifulSoup

from app.config import settings
from app.core.errors import FeedCredentialsNotFound, FeedUnavailable
from app.core.logging import get_logger
from app.connectors.givebutter.transformer import (
    build_donation,
    coerce_amount,
    format_timestamp,
)
from app.models.feed_models import DonationEvent

logger = get_logger("stream.client")

APP_ID_ATTR = "data-stream-app-id"
TOKEN_ATTR = "data-stream-token"
API_KEY_ATTR = "data-stream-api-key"


@dataclass(frozen=True)
class FeedCredentials:
    app_id: str
    token: str
    api_key: str


def _attr_value(soup: BeautifulSoup, attr: str) -> str:
    element = soup.find(attrs={attr: True})
    if element is None:
        return ""
    value = element.get(attr)
    return str(value).strip() if value else ""


def extract_feed_credentials(soup: BeautifulSoup) -> FeedCredentials:
    """Read the feed credentials from the page's data-attributes."""
    values = {attr: _attr_value(soup, attr) for attr in (APP_ID_ATTR, TOKEN_ATTR, API_KEY_ATTR)}
    missing = [attr for attr, value in values.items() if not value]
    if missing:
        raise FeedCredentialsNotFound(f"Feed credentials missing: {', '.join(missing)}")
    return FeedCredentials(
        app_id=values[APP_ID_ATTR],
        token=values[TOKEN_ATTR],
        api_key=values[API_KEY_ATTR],
    )


def _nested(record: Dict[str, Any], *path: str) -> Any:
    value: Any = record
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def transform_activity(activity: Dict[str, Any]) -> DonationEvent:
    """Map one Stream activity to a DonationEvent."""
    name = (
        _nested(activity, "actor", "data", "name")
        or _nested(activity, "actor", "name")
        or activity.get("name")
    )
    amount = activity.get("amount")
    if amount is None:
        amount = _nested(activity, "data", "amount")
    message = _nested(activity, "data", "message") or _nested(activity, "object", "message")
    return build_donation(
        name=name if isinstance(name, str) else None,
        amount=coerce_amount(amount),
        time=format_timestamp(activity.get("time")),
        message=message if isinstance(message, str) else None,
    )


class StreamFeedClient:
    """Async HTTP client for the Stream activity feed."""

    def __init__(
        self,
        base_url: str | None = None,
        feed_group: str | None = None,
        feed_id: int | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = (base_url or settings.stream_base_url).rstrip("/")
        self.feed_group = feed_group or settings.stream_feed_group
        self.feed_id = feed_id if feed_id is not None else settings.stream_feed_id
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

    @property
    def feed_url(self) -> str:
        return f"{self.base_url}/api/v1.0/feed/{self.feed_group}/{self.feed_id}/"

    async def fetch_activities(
        self, credentials: FeedCredentials, limit: int | None = None
    ) -> List[Dict[str, Any]]:
        """Fetch the most recent activities from the campaign feed."""
        client = await self._get_client()
        if limit is None:
            limit = settings.donor_limit
        params = {"api_key": credentials.api_key, "limit": limit}
        headers = {
            "Authorization": credentials.token,
            "Stream-Auth-Type": "jwt",
            "X-Stream-App-Id": credentials.app_id,
        }
        try:
            resp = await client.get(self.feed_url, params=params, headers=headers)
        except httpx.RequestError as e:
            raise FeedUnavailable(f"Feed request failed: {e}") from e

        if not resp.is_success:
            raise FeedUnavailable(
                f"Feed responded with {resp.status_code}", status_code=resp.status_code
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise FeedUnavailable("Feed returned a non-JSON body") from e

        results = body.get("results") if isinstance(body, dict) else None
        if not isinstance(results, list):
            return []
        return [r for r in results if isinstance(r, dict)]

    async def fetch_donors(self, html: str, limit: int | None = None) -> List[DonationEvent]:
        """Extract credentials from the page and map the feed to donors."""
        if limit is None:
            limit = settings.donor_limit
        credentials = extract_feed_credentials(BeautifulSoup(html, "html.parser"))
        activities = await self.fetch_activities(credentials, limit=limit)
        logger.info(f"Feed returned {len(activities)} activities")
        return [transform_activity(a) for a in activities[:limit]]

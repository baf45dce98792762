"""ButterDish — Feed Pipelines.

Runs the two request-scoped flows:
  campaign: fetch page → bounded GB_CAMPAIGN object → normalize
  donors:   fetch page → DOM scrape → embedded JSON → Stream feed → sample donors
"""

import time
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from bs4 import BeautifulSoup

from app.config import settings
from app.connectors.givebutter.campaign_parser import parse_campaign
from app.connectors.givebutter.client import GivebutterClient
from app.connectors.givebutter.donor_parser import scrape_dom_donors, scrape_embedded_donors
from app.connectors.givebutter.transformer import format_clock
from app.connectors.stream.client import StreamFeedClient
from app.core.fallback import first_non_empty
from app.core.logging import get_logger
from app.models.feed_models import CampaignSnapshot, DonationEvent

logger = get_logger("pipeline")


def sample_donors(now: Optional[datetime] = None) -> List[DonationEvent]:
    """Illustrative donors shown when no strategy recovers real ones."""
    now = now or datetime.now(timezone.utc)
    return [
        DonationEvent(
            name="Mark Williams",
            amount=10,
            time=format_clock(now - timedelta(minutes=31)),
        ),
        DonationEvent(
            name="Will Sigmon",
            amount=5,
            time=format_clock(now - timedelta(hours=2)),
            message="Let's go, HTI!",
        ),
    ]


async def build_campaign_snapshot(client: GivebutterClient) -> CampaignSnapshot:
    """Fetch the page and extract the campaign snapshot. Raises on failure."""
    start = time.perf_counter()
    page = await client.fetch_page()
    snapshot = parse_campaign(page.html)
    logger.info(
        f"Campaign {snapshot.id}: raised {snapshot.raised} of {snapshot.goal}",
        extra={"duration_ms": round((time.perf_counter() - start) * 1000, 1)},
    )
    return snapshot


async def collect_donors(
    client: GivebutterClient,
    feed_client: StreamFeedClient,
    strategy: Optional[str] = None,
) -> List[DonationEvent]:
    """Run the donor fallback chain and return the recovered donors.

    Returns an empty list when every strategy is exhausted. Fetch failures
    propagate so the caller can substitute sample donors.
    """
    strategy = strategy or settings.donor_strategy
    limit = settings.donor_limit

    page = await client.fetch_page()
    soup = BeautifulSoup(page.html, "html.parser")

    feed = ("stream_feed", lambda: feed_client.fetch_donors(page.html, limit=limit))
    if strategy == "feed":
        chain = [feed]
    else:
        chain = [
            ("dom_scrape", lambda: scrape_dom_donors(soup, limit=limit)),
            ("embedded_json", lambda: scrape_embedded_donors(soup, limit=limit)),
            feed,
        ]

    source, donors = await first_non_empty(chain)
    if source:
        logger.info(f"Donors recovered via {source}", extra={"strategy": source})
    return donors[:limit]

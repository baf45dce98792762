"""ButterDish — Campaign Snapshot Extraction."""

import re

from bs4 import BeautifulSoup

from app.core.bounded import extract_bounded_object
from app.connectors.givebutter.transformer import transform_campaign
from app.models.feed_models import CampaignSnapshot

SUPPORTERS_SELECTOR = '[data-part="supporters"] span'


def extract_supporter_count(soup: BeautifulSoup) -> int:
    """Read the rendered supporter counter; 1 when missing or unreadable."""
    element = soup.select_one(SUPPORTERS_SELECTOR)
    if element is None:
        return 1
    match = re.match(r"\s*(\d+)", element.get_text().replace(",", ""))
    if not match:
        return 1
    return max(int(match.group(1)), 1)


def parse_campaign(html: str) -> CampaignSnapshot:
    """Extract the campaign snapshot from the raw page.

    The embedded GB_CAMPAIGN object is the only source for totals, so its
    absence raises (CampaignDataNotFound / MalformedExtraction). The
    supporter counter is read independently and never fails the extraction.
    """
    raw = extract_bounded_object(html)
    supporter_count = extract_supporter_count(BeautifulSoup(html, "html.parser"))
    return transform_campaign(raw, supporter_count=supporter_count)

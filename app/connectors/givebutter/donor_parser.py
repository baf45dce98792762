"""ButterDish — Donor Extraction from the Campaign Page.

Two strategies, tried in order by the donor pipeline:
  1. DOM scrape of the activity widget (several markup conventions).
  2. The ``transactions`` array embedded in an inline script.
"""

from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup, Tag

from app.config import settings
from app.core.bounded import find_transactions_array, parse_array
from app.core.logging import get_logger
from app.connectors.givebutter.transformer import (
    build_donation,
    coerce_amount,
    format_timestamp,
    is_placeholder,
    parse_amount,
)
from app.models.feed_models import DonationEvent

logger = get_logger("givebutter.donors")

# Upstream has renamed these more than once; every convention stays listed.
ITEM_SELECTOR = '[data-testid="transaction-item"], .transaction-item, .activity-item'
NAME_SELECTORS = (
    '[data-testid="supporter-name"], .supporter-name, .donor-name',
    "h3, h4, .name",
)
AMOUNT_SELECTOR = '[data-testid="transaction-amount"], .amount, .transaction-amount'
TIME_SELECTOR = '[data-testid="transaction-time"], .time, time'
MESSAGE_SELECTOR = '[data-testid="transaction-message"], .message, .comment'

SCRIPT_MARKERS = ("window.GB_CAMPAIGN", "transactions")


def _first_text(element: Tag, selector: str) -> str:
    found = element.select_one(selector)
    return found.get_text(" ", strip=True) if found is not None else ""


def _item_name(element: Tag) -> str:
    for selector in NAME_SELECTORS:
        text = _first_text(element, selector)
        if text:
            return text
    return ""


def scrape_dom_donors(soup: BeautifulSoup, limit: Optional[int] = None) -> List[DonationEvent]:
    """Scrape donation items from the rendered activity widget."""
    if limit is None:
        limit = settings.donor_limit
    donors: List[DonationEvent] = []

    for element in soup.select(ITEM_SELECTOR)[:limit]:
        event = build_donation(
            name=_item_name(element),
            amount=parse_amount(_first_text(element, AMOUNT_SELECTOR)),
            time=_first_text(element, TIME_SELECTOR),
            message=_first_text(element, MESSAGE_SELECTOR),
        )
        # Matched the selector but carries no signal
        if is_placeholder(event):
            continue
        donors.append(event)

    return donors


def transform_transaction(entry: Dict[str, Any]) -> DonationEvent:
    """Map one embedded transaction object to a DonationEvent."""
    time = entry.get("time")
    if not isinstance(time, str) or not time.strip():
        time = format_timestamp(entry.get("created_at"))
    return build_donation(
        name=entry.get("supporter_name") or entry.get("name"),
        amount=coerce_amount(entry.get("amount")),
        time=time,
        message=entry.get("message"),
    )


def _candidate_scripts(soup: BeautifulSoup) -> List[str]:
    scripts = []
    for script in soup.find_all("script"):
        text = script.get_text()
        if any(marker in text for marker in SCRIPT_MARKERS):
            scripts.append(text)
    return scripts


def scrape_embedded_donors(soup: BeautifulSoup, limit: Optional[int] = None) -> List[DonationEvent]:
    """Recover donors from the ``transactions`` array of an inline script.

    Raises MalformedExtraction when the located array does not parse.
    """
    if limit is None:
        limit = settings.donor_limit

    for text in _candidate_scripts(soup):
        literal = find_transactions_array(text)
        if literal is None:
            continue
        entries = parse_array(literal)
        donors = [transform_transaction(e) for e in entries[:limit] if isinstance(e, dict)]
        logger.info(f"Found {len(entries)} embedded transactions")
        return donors

    return []

"""ButterDish — Raw → Normalized Transformer.

Coerces the loosely-typed values scraped from the page (strings, nulls,
missing keys) into the fixed CampaignSnapshot / DonationEvent schema.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.config import settings
from app.models.feed_models import CampaignSnapshot, DonationEvent

LEADING_NUMBER = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)")
NON_AMOUNT_CHARS = re.compile(r"[^0-9.]")
LEADING_DECIMAL = re.compile(r"^\d*\.?\d+")


def _leading_float(value: Any) -> float:
    """Parse the numeric prefix of a value ("1500.00", "12abc" → 12.0)."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    match = LEADING_NUMBER.match(str(value)) if value is not None else None
    return float(match.group(0)) if match else 0.0


def parse_amount(text: Optional[str]) -> float:
    """Strip everything except digits and '.', then read the leading decimal.

    "$1,234.56 USD" → 1234.56, "$10.00 by J. Smith" → 10.0, no digits → 0.
    """
    cleaned = NON_AMOUNT_CHARS.sub("", text or "")
    match = LEADING_DECIMAL.match(cleaned)
    return float(match.group(0)) if match else 0.0


def coerce_amount(value: Any) -> float:
    """Amounts arrive as numbers or as display strings."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return max(float(value), 0.0)
    return parse_amount(str(value))


def format_clock(moment: Optional[datetime] = None) -> str:
    """Format a moment as local wall-clock 'h:MM AM'."""
    moment = (moment or datetime.now(timezone.utc)).astimezone()
    return f"{moment.hour % 12 or 12}:{moment.minute:02d} {'AM' if moment.hour < 12 else 'PM'}"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: Any) -> str:
    """Format an upstream timestamp, falling back to the current time."""
    return format_clock(parse_timestamp(value))


def build_donation(
    name: Optional[str],
    amount: float,
    time: Optional[str] = None,
    message: Optional[str] = None,
) -> DonationEvent:
    """Apply the shared donor defaults."""
    name = (name or "").strip() if isinstance(name, str) else ""
    message = message.strip() if isinstance(message, str) else None
    return DonationEvent(
        name=name or settings.placeholder_donor_name,
        amount=max(amount, 0.0),
        time=(time or "").strip() or format_clock(),
        message=message or None,
    )


def is_placeholder(event: DonationEvent) -> bool:
    """True when an event carries neither a real name nor an amount."""
    return event.amount <= 0 and event.name == settings.placeholder_donor_name


def _theme_color(raw: Dict[str, Any]) -> str:
    for setting in raw.get("settings") or []:
        if isinstance(setting, dict) and setting.get("name") == "theme_color":
            if setting.get("value"):
                return str(setting["value"])
    return settings.default_theme_color


def transform_campaign(raw: Dict[str, Any], supporter_count: int = 1) -> CampaignSnapshot:
    """Normalize the embedded GB_CAMPAIGN object into a CampaignSnapshot."""
    cover = raw.get("cover")
    cover_url = cover.get("url") if isinstance(cover, dict) else None

    return CampaignSnapshot(
        id=int(_leading_float(raw.get("id"))),
        title=str(raw.get("title") or ""),
        goal=_leading_float(raw.get("goal")),
        raised=max(_leading_float(raw.get("raised")), 0.0),
        raised_percentage=_leading_float(raw.get("raised_percentage")),
        supporter_count=max(supporter_count, 1),
        cover_image=cover_url or None,
        theme_color=_theme_color(raw),
        url=str(raw.get("url") or settings.campaign_url),
        timestamp=datetime.now(timezone.utc),
    )

"""ButterDish — Bounded JSON Extraction.

Recovers JSON values embedded in raw page text by locating their textual
markers instead of parsing the surrounding script.
"""

import json
import re
from typing import Any, Dict, List, Pattern

from app.core.errors import CampaignDataNotFound, MalformedExtraction

# window.GB_CAMPAIGN = {...}; window.givebutterDefaults
CAMPAIGN_OBJECT_PATTERN = re.compile(
    r"window\.GB_CAMPAIGN\s*=\s*(\{[\s\S]*?\});\s*window\.givebutterDefaults"
)

TRANSACTIONS_KEY_PATTERN = re.compile(r"""transactions["']?\s*:\s*\[""")


def extract_bounded_object(text: str, pattern: Pattern[str] = CAMPAIGN_OBJECT_PATTERN) -> Dict[str, Any]:
    """Parse the object captured by the first group of ``pattern``.

    Raises:
        CampaignDataNotFound: the markers are not present.
        MalformedExtraction: the bounded substring is not a JSON object.
    """
    match = pattern.search(text or "")
    if not match:
        raise CampaignDataNotFound("Campaign data not found in page")

    try:
        value = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise MalformedExtraction(f"Campaign data is not valid JSON: {e.msg}") from e

    if not isinstance(value, dict):
        raise MalformedExtraction("Campaign data is not a JSON object")
    return value


def _balanced_end(text: str, start: int) -> int:
    """Return the index just past the bracket group opening at ``start``.

    Brackets inside JSON strings are ignored. Returns -1 when the group never
    closes.
    """
    opening = text[start]
    closing = "]" if opening == "[" else "}"
    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in "[{":
            depth += 1
        elif ch in "]}":
            depth -= 1
            if depth == 0:
                return i + 1 if ch == closing else -1
    return -1


def find_transactions_array(text: str) -> str | None:
    """Return the raw ``transactions: [...]`` array literal, or None."""
    match = TRANSACTIONS_KEY_PATTERN.search(text or "")
    if not match:
        return None
    start = match.end() - 1
    end = _balanced_end(text, start)
    if end == -1:
        return None
    return text[start:end]


def parse_array(literal: str) -> List[Any]:
    """Parse a located array literal, raising MalformedExtraction on failure."""
    try:
        value = json.loads(literal)
    except json.JSONDecodeError as e:
        raise MalformedExtraction(f"Transactions array is not valid JSON: {e.msg}") from e
    if not isinstance(value, list):
        raise MalformedExtraction("Transactions value is not a JSON array")
    return value

"""ButterDish — Structured JSON Logging.

One JSON object per line on stdout, so the host's log drain can filter
scrape failures by ``strategy`` or ``error_code`` without parsing text.
"""

import logging
import json
import sys
from datetime import datetime, timezone
from app.config import settings

# Keys callers may pass through ``extra=``
EXTRA_FIELDS = ("endpoint", "strategy", "status_code", "duration_ms", "error_code")


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line tagged with the service version."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": "butterdish",
            "version": settings.app_version,
            "message": record.getMessage(),
        }
        log_entry.update(
            {key: getattr(record, key) for key in EXTRA_FIELDS if hasattr(record, key)}
        )
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return ``butterdish.<name>`` with the JSON stdout handler attached once."""
    logger = logging.getLogger(f"butterdish.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    return logger

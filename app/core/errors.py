"""ButterDish — Extraction Error Taxonomy.

Every failure the pipelines know how to name carries a machine-readable
``code`` so routes can report it without inspecting exception types.
"""


class ScrapeError(Exception):
    """Base error for upstream fetch and extraction failures."""

    code = "SCRAPE_ERROR"

    def __init__(self, message: str, status_code: int = 0):
        self.status_code = status_code
        super().__init__(message)


class UpstreamUnreachable(ScrapeError):
    """The network call to the upstream page could not complete."""

    code = "UPSTREAM_UNREACHABLE"


class UpstreamError(ScrapeError):
    """The upstream page answered with a non-success status."""

    code = "UPSTREAM_ERROR"


class CampaignDataNotFound(ScrapeError):
    """The bounded campaign object is missing from the page."""

    code = "CAMPAIGN_DATA_NOT_FOUND"


class MalformedExtraction(ScrapeError):
    """A located JSON-like substring failed to parse."""

    code = "MALFORMED_EXTRACTION"


class FeedCredentialsNotFound(ScrapeError):
    """The page does not expose all of the real-time feed credentials."""

    code = "FEED_CREDENTIALS_NOT_FOUND"


class FeedUnavailable(ScrapeError):
    """The real-time feed could not be queried."""

    code = "FEED_UNAVAILABLE"

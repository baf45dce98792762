"""ButterDish — Donor Routes."""

from fastapi import APIRouter, Depends, Response

from app.aggregator.pipeline import collect_donors, sample_donors
from app.api.dependencies import get_givebutter_client, get_stream_client
from app.config import settings
from app.connectors.givebutter.client import GivebutterClient
from app.connectors.stream.client import StreamFeedClient
from app.core.logging import get_logger
from app.models.feed_models import DonorsResponse

logger = get_logger("api.donors")

router = APIRouter(tags=["Donors"])


@router.get("/donors", response_model=DonorsResponse, response_model_exclude_none=True)
async def get_donors(
    response: Response,
    client: GivebutterClient = Depends(get_givebutter_client),
    feed_client: StreamFeedClient = Depends(get_stream_client),
):
    """Most recent donations, newest first, at most ten.

    Never fails: when nothing can be recovered the illustrative sample donors
    are returned with a shorter cache lifetime.
    """
    try:
        donors = await collect_donors(client, feed_client)
    except Exception as e:
        logger.error(
            f"Error fetching donors: {e}",
            extra={"endpoint": "/donors", "error_code": getattr(e, "code", "INTERNAL_ERROR")},
        )
        donors = []

    if not donors:
        logger.warning("Serving sample donors", extra={"endpoint": "/donors"})
        response.headers["Cache-Control"] = settings.fallback_cache_control
        return DonorsResponse(donors=sample_donors())

    response.headers["Cache-Control"] = settings.cache_control
    return DonorsResponse(donors=donors)

"""ButterDish — Campaign Routes."""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from app.aggregator.pipeline import build_campaign_snapshot
from app.api.dependencies import get_givebutter_client
from app.config import settings
from app.connectors.givebutter.client import GivebutterClient
from app.core.errors import ScrapeError
from app.core.logging import get_logger
from app.models.feed_models import CampaignSnapshot, ErrorResponse

logger = get_logger("api.campaign")

router = APIRouter(tags=["Campaign"])


@router.get(
    "/campaign",
    response_model=CampaignSnapshot,
    responses={500: {"model": ErrorResponse}},
)
async def get_campaign(
    response: Response,
    client: GivebutterClient = Depends(get_givebutter_client),
):
    """Current campaign totals and progress.

    There is no synthetic substitute for campaign totals, so any failure is
    reported as a 500 the dashboard can retry on.
    """
    try:
        snapshot = await build_campaign_snapshot(client)
    except ScrapeError as e:
        logger.error(
            f"Error fetching campaign data: {e}",
            extra={"endpoint": "/campaign", "error_code": e.code},
        )
        return _error_response(str(e), e.code)
    except Exception as e:
        logger.exception(
            f"Unexpected error fetching campaign data: {e}",
            extra={"endpoint": "/campaign", "error_code": "INTERNAL_ERROR"},
        )
        return _error_response(str(e) or "Unknown error", "INTERNAL_ERROR")

    response.headers["Cache-Control"] = settings.cache_control
    return snapshot


def _error_response(details: str, code: str) -> JSONResponse:
    body = ErrorResponse(error="Failed to fetch campaign data", details=details, code=code)
    return JSONResponse(status_code=500, content=body.model_dump())

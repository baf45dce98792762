"""ButterDish — Feed Output Models (Dashboard Contract)."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class CampaignSnapshot(BaseModel):
    """Current state of one fundraising campaign."""

    id: int = 0
    title: str = ""
    goal: float = 0.0
    raised: float = Field(default=0.0, ge=0)
    raised_percentage: float = 0.0
    supporter_count: int = Field(default=1, ge=1)
    cover_image: Optional[str] = None
    theme_color: str
    url: str
    timestamp: datetime
    """Set by the service when the snapshot is built, not by upstream."""


class DonationEvent(BaseModel):
    """One observed contribution."""

    name: str = Field(min_length=1)
    amount: float = Field(default=0.0, ge=0)
    time: str
    message: Optional[str] = None


class DonorsResponse(BaseModel):
    """Response for GET /donors."""

    donors: List[DonationEvent]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "donors": [
                        {"name": "Will Sigmon", "amount": 5, "time": "1:05 PM", "message": "Let's go, HTI!"},
                    ]
                }
            ]
        }
    }


class ErrorResponse(BaseModel):
    """Error body for GET /campaign."""

    error: str
    details: str
    code: str = "INTERNAL_ERROR"

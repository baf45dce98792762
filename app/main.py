"""ButterDish — FastAPI Application Entry Point.

Read-only feed that turns a public Givebutter campaign page into stable JSON
for the live dashboard.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.campaign_routes import router as campaign_router
from app.api.donor_routes import router as donor_router
from app.config import settings
from app.core.logging import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("ButterDish starting up...")
    logger.info(f"Campaign page: {settings.campaign_url}")
    logger.info(f"Donor strategy: {settings.donor_strategy}")
    yield
    logger.info("ButterDish shut down")


app = FastAPI(
    title="ButterDish",
    description="Campaign totals and recent donations scraped from a public Givebutter page.",
    version=settings.app_version,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Routers (also under /api, the paths the dashboard was first deployed with)
app.include_router(campaign_router)
app.include_router(donor_router)
app.include_router(campaign_router, prefix="/api", include_in_schema=False)
app.include_router(donor_router, prefix="/api", include_in_schema=False)


@app.get("/health", tags=["System"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "butterdish",
        "version": settings.app_version,
    }

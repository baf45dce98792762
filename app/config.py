"""ButterDish — Central Configuration via Pydantic Settings."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Upstream page ──
    campaign_url: str = "https://givebutter.com/giftofaccess"
    user_agent: str = "Mozilla/5.0 (compatible; ButterDish/1.0)"
    http_timeout: Optional[float] = None  # None = wait for upstream

    # ── Donor feed ──
    donor_limit: int = 10
    donor_strategy: Literal["scrape", "feed"] = "scrape"
    placeholder_donor_name: str = "A generous supporter"

    # ── Stream (real-time activity feed) ──
    stream_base_url: str = "https://us-east-api.stream-io-api.com"
    stream_feed_group: str = "campaign"
    stream_feed_id: int = 259042

    # ── Response ──
    default_theme_color: str = "#F67B16"
    cache_control: str = "public, s-maxage=30, stale-while-revalidate=59"
    fallback_cache_control: str = "public, s-maxage=30"

    # ── App ──
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()

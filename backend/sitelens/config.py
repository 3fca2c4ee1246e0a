from pydantic_settings import BaseSettings
from functools import lru_cache
import os


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    insights_model: str = "claude-sonnet-4-20250514"

    # Root page navigation (milliseconds)
    navigation_timeout: int = 45000
    readiness_timeout: int = 15000

    # Subpage crawl
    subpage_timeout: int = 20000
    subpage_limit: int = 12
    max_concurrent_subpages: int = 0  # 0 = one task per selected link
    subpage_text_limit: int = 10000
    internal_link_limit: int = 50

    # Extraction
    max_style_samples: int = 500
    scroll_step: int = 100  # px per tick
    scroll_interval: int = 100  # ms per tick
    max_scroll: int = 10000  # px

    # Browser
    headless: bool = True
    viewport_width: int = 1440
    viewport_height: int = 900
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.9"
    screenshot_quality: int = 80

    class Config:
        # Look for .env in the repo root (two levels up from backend/sitelens/)
        _env_path = os.path.join(os.path.dirname(__file__), "..", "..", ".env")
        env_file = _env_path if os.path.exists(_env_path) else None
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings():
    return Settings()

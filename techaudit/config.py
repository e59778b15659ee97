from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache
from pathlib import Path
from typing import Optional

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )
    # Shared secret expected in the x-techaudit-secret header
    techaudit_secret: Optional[str] = None
    # Google PageSpeed Insights
    pagespeed_api_key: Optional[str] = None
    pagespeed_api_url: str = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
    upstream_timeout_seconds: float = 60.0
    # Responses
    include_raw_lighthouse: bool = True
    health_requires_secret: bool = True
    # App
    environment: str = "development"
    static_dir: str = str(PACKAGE_DIR / "static")
    extra_allowed_origins: str = ""   # comma-separated, for the dashboard on another host
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    return Settings()

"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ORIGIN = "hooks.slack.com"


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class Settings:
    slack_token: str
    yelp_api_key: str
    port: int = 8080
    allowed_origin: str = DEFAULT_ALLOWED_ORIGIN
    http_timeout: float = 10.0

    def require_yelp_api_key(self) -> str:
        if not self.yelp_api_key:
            raise ConfigError("YELP_API_KEY must be set in the environment to query Yelp.")
        return self.yelp_api_key


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    slack_token = os.getenv("SLACK_TOKEN", "")
    yelp_api_key = os.getenv("YELP_API_KEY", "")
    port = int(os.getenv("PORT", "8080"))
    allowed_origin = os.getenv("ALLOWED_ORIGIN", "").strip() or DEFAULT_ALLOWED_ORIGIN
    http_timeout = float(os.getenv("HTTP_TIMEOUT", "10"))

    if not slack_token:
        logger.warning("SLACK_TOKEN is not set; every slash command will be rejected.")
    if not yelp_api_key:
        logger.warning("YELP_API_KEY is not configured; Yelp requests will fail.")

    return Settings(
        slack_token=slack_token,
        yelp_api_key=yelp_api_key,
        port=port,
        allowed_origin=allowed_origin,
        http_timeout=http_timeout,
    )

"""
Runtime configuration for the trip planner.

The turn controller and provider clients receive a TripPlannerConfig
explicitly; only from_env() reads the process environment.

Python 3.9 compatible - uses typing.List, typing.Optional
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

TAVILY_SEARCH_URL = "https://api.tavily.com/search"
GROQ_BASE_URL = "https://api.groq.com/openai/v1"
GROQ_MODEL = "llama-3.3-70b-versatile"

TRAVEL_DOMAINS = [
    "tripadvisor.com",
    "lonelyplanet.com",
    "timeout.com",
    "booking.com",
    "airbnb.com",
]


@dataclass
class TripPlannerConfig:
    """Provider keys, endpoints and request parameters."""
    tavily_api_key: Optional[str] = None
    groq_api_key: Optional[str] = None

    # Search provider
    tavily_search_url: str = TAVILY_SEARCH_URL
    search_depth: str = "advanced"
    max_results: int = 5
    include_domains: List[str] = field(default_factory=lambda: list(TRAVEL_DOMAINS))

    # Completion provider
    groq_base_url: str = GROQ_BASE_URL
    groq_model: str = GROQ_MODEL
    max_tokens: int = 2000
    temperature: float = 0.7
    # Failed completions are not retried; a failed turn is retried by the caller
    max_retries: int = 0

    # httpx transport timeout in seconds
    http_timeout: float = 30.0

    @property
    def tavily_configured(self) -> bool:
        return bool(self.tavily_api_key)

    @property
    def groq_configured(self) -> bool:
        return bool(self.groq_api_key)

    @classmethod
    def from_env(cls) -> "TripPlannerConfig":
        """Build the config from environment variables (call after load_dotenv)."""
        timeout_raw = os.getenv("TRIP_HTTP_TIMEOUT", "30")
        try:
            http_timeout = float(timeout_raw)
        except ValueError:
            logger.warning(f"Invalid TRIP_HTTP_TIMEOUT={timeout_raw!r}, using 30s")
            http_timeout = 30.0

        return cls(
            tavily_api_key=os.getenv("TAVILY_API_KEY") or None,
            groq_api_key=os.getenv("GROQ_API_KEY") or None,
            tavily_search_url=os.getenv("TAVILY_SEARCH_URL", TAVILY_SEARCH_URL),
            groq_base_url=os.getenv("GROQ_BASE_URL", GROQ_BASE_URL),
            groq_model=os.getenv("GROQ_MODEL", GROQ_MODEL),
            http_timeout=http_timeout,
        )


def mask_key(key: Optional[str]) -> str:
    """Mask API key showing only last 4 chars."""
    if not key:
        return "(not set)"
    if len(key) <= 4:
        return "****"
    return f"****{key[-4:]}"

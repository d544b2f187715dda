"""Search configuration loaded from the environment."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()

DEFAULT_SERPER_URL = "https://google.serper.dev/search"


class SearchConfig(BaseModel):
    """Configuration for the Serper search client.

    Attributes:
        api_key: Serper API key.
        base_url: Search endpoint URL.
        timeout: Request timeout in seconds.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("SERPER_API_KEY", ""),
        description="API key for Serper",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("SERPER_BASE_URL", DEFAULT_SERPER_URL),
        description="Serper search endpoint",
    )
    timeout: float = Field(
        default=30.0,
        gt=0.0,
        le=300.0,
        description="Request timeout in seconds",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("Search API key required. Set SERPER_API_KEY in .env")
        return v.strip()


def get_search_config() -> SearchConfig:
    """Create search configuration from environment.

    Raises:
        ValueError: If no Serper API key is set.
    """
    return SearchConfig()

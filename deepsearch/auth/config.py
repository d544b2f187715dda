"""Authentication configuration loaded from the environment."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class AuthConfig(BaseModel):
    """Configuration for cookie sessions.

    Attributes:
        secret: Key used to sign session cookies.
        password: Shared password accepted by the login endpoint.
        session_max_age: Session lifetime in seconds.
    """

    secret: str = Field(
        default_factory=lambda: os.getenv("AUTH_SECRET", ""),
        description="Session signing secret",
    )
    password: str = Field(
        default_factory=lambda: os.getenv("AUTH_PASSWORD", ""),
        description="Shared login password",
    )
    session_max_age: int = Field(
        default=7 * 24 * 60 * 60,
        ge=60,
        description="Session lifetime in seconds",
    )

    @field_validator("secret", "password")
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Validate that secrets are provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("AUTH_SECRET and AUTH_PASSWORD must be set in .env")
        return v.strip()


def get_auth_config() -> AuthConfig:
    """Create auth configuration from environment.

    Raises:
        ValueError: If AUTH_SECRET or AUTH_PASSWORD is not set.
    """
    return AuthConfig()

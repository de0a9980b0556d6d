"""Application configuration."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pipeline settings loaded from environment variables.

    Settings are loaded in this priority order (highest to lowest):
    1. Environment variables
    2. .env file (for local development)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Justice Laws Website
    # =========================================================================
    # Source: https://laws-lois.justice.gc.ca (Open Government Licence - Canada)
    justice_base_url: str = "https://laws-lois.justice.gc.ca"
    default_language: str = Field(
        default="eng",
        description="Site language segment: 'eng' or 'fra'",
    )
    user_agent: str = Field(
        default="Canadian-Law-MCP/1.0 (https://github.com/Ansvar-Systems/canadian-law-mcp)",
        description="User-Agent sent with every request",
    )
    request_timeout: float = Field(default=60.0, gt=0)

    # =========================================================================
    # Politeness and retries
    # =========================================================================
    min_request_delay: float = Field(
        default=0.5,
        ge=0,
        description="Minimum seconds between request starts",
    )
    max_retries: int = Field(default=3, ge=0)
    retry_delay: float = Field(
        default=1.0,
        ge=0,
        description="Backoff base; attempt n waits retry_delay * 2**(n + 1) seconds",
    )

    # =========================================================================
    # Data directories
    # =========================================================================
    source_dir: Path = Path("data/source")
    seed_dir: Path = Path("data/seed")


settings = Settings()

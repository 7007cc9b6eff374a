"""
Application configuration using Pydantic settings.

Usage:
    from issue_browser.config import get_settings
    settings = get_settings()
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"
DEFAULT_PATH = "the-road-to-learn-react/the-road-to-learn-react"


class Settings(BaseSettings):
    """
    Settings loaded from environment variables and .env file.

    Required for API access:
        - GITHUB_TOKEN (or GITHUB_PERSONAL_ACCESS_TOKEN)
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Repository Issue Browser"
    debug: bool = Field(default=False, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # GitHub GraphQL API
    github_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN", "GITHUB_PERSONAL_ACCESS_TOKEN"),
    )
    graphql_url: str = Field(default=GITHUB_GRAPHQL_URL, validation_alias="GITHUB_GRAPHQL_URL")
    request_timeout: int = Field(default=30, validation_alias="REQUEST_TIMEOUT")
    user_agent: str = Field(default="issue-browser/1.0", validation_alias="USER_AGENT")

    # Session
    default_path: str = Field(default=DEFAULT_PATH, validation_alias="DEFAULT_PATH")

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Reject non-positive timeouts."""
        if v <= 0:
            raise ValueError(f"REQUEST_TIMEOUT must be positive (got {v})")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings", "GITHUB_GRAPHQL_URL", "DEFAULT_PATH"]

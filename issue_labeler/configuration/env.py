"""Pydantic Settings model for the GitHub Actions runtime environment."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from issue_labeler.utils.constants import DEFAULT_GITHUB_API_URL


class Settings(BaseSettings):
    """Environment variable settings describing the workflow run that triggered the labeler."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # Set by GitHub Actions for every workflow run
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    GITHUB_REPOSITORY: str | None = None
    GITHUB_SHA: str | None = None
    GITHUB_EVENT_PATH: Path | None = None
    GITHUB_EVENT_NAME: str | None = None

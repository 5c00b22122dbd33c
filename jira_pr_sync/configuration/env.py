"""Pydantic Settings model for the GitHub Actions runner environment."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment variables provided by the GitHub Actions runner."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Set to "1" by the runner when debug logging is enabled for a re-run
    RUNNER_DEBUG: bool = False

    # GitHub API settings
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_REPOSITORY: str | None = None

    # Event and workflow command files
    GITHUB_EVENT_PATH: Path | None = None
    GITHUB_OUTPUT: Path | None = None

    # Source branch of the pull request, only set for pull_request events
    GITHUB_HEAD_REF: str | None = None

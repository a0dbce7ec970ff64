"""
Application Configuration Module.

Manages application settings and environment variables using Pydantic for validation.
Provides centralized configuration management with type safety and validation.

Features:
- Environment variable loading and validation
- Secure credential management
- Trigger event configuration per monitored repository
- Path normalization for the job data directory
"""

import os
from typing import List, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from logger import LogManager


def _split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """
    Application configuration settings with validation.

    Manages and validates all application settings including:
    - Application identification and logging
    - GitHub authentication and API location
    - Monitored repositories
    - Trigger events applied to every monitored repository

    Attributes:
        app_name (str): Name of the application
        dev (bool): Development mode flag (human readable console logs)
        log_dir (str): Directory for log files
        log_level (int): Logging level (default: debug)
        github_token (Optional[SecretStr]): GitHub API authentication token
        github_api_url (str): Base URL of the GitHub API
        github_repo_urls (str): Comma-separated repository URLs
        github_retry_attempts (int): Attempts for every remote call
        data_dir (str): Root directory for per-job state
        allowed_users (str): Comma-separated logins allowed to trigger by comment
    """

    # Application settings
    app_name: str = Field(default="PRTrigger", description="Application name")
    dev: bool = Field(default=False, description="Development mode")
    log_dir: str = Field(default="logs", description="Logging directory")
    log_level: int = Field(default=10, description="Logging level, default debug")

    # GitHub configuration
    github_token: Optional[SecretStr] = Field(default=None, description="GitHub token")
    github_api_url: str = Field(
        default="https://api.github.com", description="GitHub API base URL"
    )
    github_repo_urls: str = Field(
        default="", description="Comma-separated GitHub repository URLs to monitor"
    )
    github_retry_attempts: int = Field(
        default=3, description="Attempts for each GitHub API call"
    )

    data_dir: str = Field(default="data", description="Job state directory")

    # Trigger events
    trigger_on_open: bool = Field(default=True, description="Trigger on opened PRs")
    trigger_on_close: bool = Field(default=False, description="Trigger on closed PRs")
    trigger_on_commit: bool = Field(default=True, description="Trigger on new commits")
    trigger_on_branch_retarget: bool = Field(
        default=False, description="Trigger when the target branch changes"
    )
    trigger_on_non_mergeable: bool = Field(
        default=False, description="Trigger when a PR stops being mergeable"
    )
    trigger_comment_pattern: Optional[str] = Field(
        default=None, description="Regular expression a new comment must fully match"
    )
    trigger_labels_added: str = Field(
        default="", description="Comma-separated label set watched for addition"
    )
    trigger_labels_removed: str = Field(
        default="", description="Comma-separated label set watched for removal"
    )

    # User restriction
    allowed_users: str = Field(
        default="", description="Comma-separated logins allowed to trigger by comment"
    )

    @property
    def repository_urls(self) -> List[str]:
        """
        Get list of repository URLs from configuration.

        Returns:
            List[str]: List of cleaned repository URLs
        """
        return _split_csv(self.github_repo_urls)

    @property
    def labels_added(self) -> List[str]:
        return _split_csv(self.trigger_labels_added)

    @property
    def labels_removed(self) -> List[str]:
        return _split_csv(self.trigger_labels_removed)

    @property
    def allowed_user_logins(self) -> List[str]:
        return _split_csv(self.allowed_users)

    @field_validator("data_dir")
    def ensure_absolute_path(cls, v: str) -> str:
        """
        Ensure the data directory path is absolute.

        Args:
            v (str): Directory path to validate

        Returns:
            str: Absolute path to the data directory
        """
        if not os.path.isabs(v):
            return os.path.abspath(v)
        return v

    # Configure env file loading
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )


# Create global settings instance
settings = Settings()

# Initialize logging configuration
logger = LogManager(
    app_name=settings.app_name.lower(),
    log_dir=settings.log_dir,
    development=settings.dev,
    level=settings.log_level,
).logger

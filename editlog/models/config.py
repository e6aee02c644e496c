"""Configuration models for the edit log tracker."""

from pydantic import BaseModel, Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class RepositoryConfig(BaseModel):
    """Configuration for the remote repository holding the log file."""

    url: str = Field(
        default=...,
        description="Repository URL, e.g. https://github.com/user/repo.git",
    )
    access_token: str = Field(default=..., min_length=1, description="Personal access token")
    log_path: str = Field(
        default="logs.txt", min_length=1, description="Path of the log file inside the repository"
    )
    branch: str | None = Field(
        default=None, description="Branch to commit to. None uses the repository default."
    )
    api_base_url: HttpUrl = Field(
        default=HttpUrl("https://api.github.com"), description="Contents API base URL"
    )
    request_timeout: float = Field(
        default=30.0, gt=0, le=300, description="HTTP timeout in seconds"
    )


class TrackerConfig(BaseModel):
    """Configuration for change tracking and flushing."""

    watch_path: str = Field(default=".", description="Workspace directory to watch")
    flush_interval_minutes: float = Field(
        default=30.0, gt=0, description="Minutes between flushes of buffered changes"
    )
    flush_on_shutdown: bool = Field(
        default=True, description="Flush buffered changes once more when stopping"
    )
    ignore_patterns: list[str] = Field(
        default_factory=lambda: [
            ".git/*",
            "*/.git/*",
            "*.swp",
            "*.tmp",
            "*~",
            "__pycache__/*",
            "*/__pycache__/*",
        ],
        description="Glob patterns (relative to watch_path) that are not tracked",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        description="If True, output JSON logs. If False, use console format.",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional path to log file. If None, logs only to stdout.",
    )


class AppConfig(BaseSettings):
    """Main application configuration.

    This class uses pydantic-settings to load configuration from environment
    variables with the EDITLOG_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="EDITLOG_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    repository: RepositoryConfig
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

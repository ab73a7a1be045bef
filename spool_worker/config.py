"""Configuration system for the spool worker."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Spool Worker Configuration."""

    # Processing
    seconds_per_unit: float = Field(
        default=60.0,
        ge=0.0,
        description="Seconds of wall-clock delay per minute of simulated work",
    )
    keep: int = Field(
        default=5,
        ge=1,
        description="Rolling window size and summary interval (in processed files)",
    )

    # Coordination
    max_jitter_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Upper bound of the random sleep before each dequeue attempt",
    )
    recursive: bool = Field(
        default=True,
        description="Watch subdirectories of the watched directory as well",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines instead of plain text",
    )
    worker_name: str | None = Field(
        default=None,
        description="Label used in log lines (defaults to host:pid)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize the level name and reject unknown ones."""
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level

    model_config = {
        "env_prefix": "SPOOL_WORKER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Settings singleton with dependency injection support
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the settings instance (lazy-loaded singleton).

    Returns:
        The Settings instance.

    Example:
        from spool_worker.config import get_settings
        settings = get_settings()
        print(settings.keep)
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override the settings instance (for testing).

    Args:
        new_settings: The new Settings instance to use.
    """
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to None (forces reload on next get_settings call)."""
    global _settings
    _settings = None


"""Configuration management for TaskTimer."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# TaskTimer config directory
TASKTIMER_DIR = Path.home() / ".tasktimer"
TASKTIMER_ENV_FILE = TASKTIMER_DIR / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TASKTIMER_",
        # Later files override earlier ones
        env_file=(str(TASKTIMER_ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage settings
    storage_path: Path | None = Field(
        default=None,
        description="Path for the key-value storage file (default: ~/.tasktimer/storage.json)",
    )

    # Stopwatch settings
    tick_interval: float = Field(
        default=1.0,
        gt=0,
        description="Seconds between stopwatch display refreshes",
    )

    # Task settings
    delete_stops_global_timer: bool = Field(
        default=False,
        description="Stop the global stopwatch when a running task is deleted (legacy behavior)",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Console log level when not running with --verbose",
    )

    def get_storage_path(self) -> Path:
        """Get the storage path, using default if not set."""
        if self.storage_path:
            return self.storage_path.expanduser()
        return TASKTIMER_DIR / "storage.json"


# Global settings instance
settings = Settings()

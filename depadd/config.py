"""Environment configuration for DepAdd.

Settings come from ``DEPADD_*`` environment variables, optionally through a
local ``.env`` file. Command-line flags take precedence where both exist.
"""

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """DepAdd settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="DEPADD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    unstable_options: bool = False
    package: str | None = None  # used when no -p/--package is given
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}")
        return level


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is invalid.
    """
    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc

import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REGISTRY_SIGNING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Registries configuration file holding the `security` section
    registries_config_path: str = "registries.json"

    # Forwarded to the metadata provider and verifier as a hint only
    validation_timeout_seconds: Optional[float] = Field(default=None, gt=0)
    # An unanswered interactive prompt counts as "do not continue"
    prompt_timeout_seconds: Optional[float] = Field(default=None, gt=0)

    # Application Configuration
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name and reject unknown levels."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def configure_logging(config: Optional[Settings] = None) -> None:
    """Configure root logging for command line or service entry points."""
    config = config or settings
    logging.basicConfig(level=getattr(logging, config.log_level), format=LOG_FORMAT)


settings = Settings()

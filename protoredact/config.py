"""Configuration management with Pydantic settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """protoredact configuration settings.

    Precedence: CLI flag > environment variable > .env file > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROTOREDACT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Emit debug logging for skipped files, services, methods and messages",
    )

    fail_fast: bool = Field(
        default=False,
        description="Stop at the first resolution error instead of collecting all of them",
    )

    output_dir: Path | None = Field(
        default=None,
        description="Directory for rendered decision files (defaults to the working directory)",
    )

    output_suffix: str = Field(
        default=".redact.json",
        min_length=1,
        description="Suffix appended to the schema file stem for rendered output",
    )

    def get_output_dir(self) -> Path:
        """Get the output directory, creating if necessary."""
        output_dir = self.output_dir if self.output_dir is not None else Path.cwd()
        output_dir.mkdir(parents=True, exist_ok=True)
        return output_dir


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings

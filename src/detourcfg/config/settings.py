"""
detourcfg Library Settings

Runtime knobs for the resolution engine, read from the environment
(``DETOURCFG_*``) or a ``.env`` file through pydantic-settings.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from detourcfg.config.constants import DEFAULT_SETTINGS, ENV_PREFIX


class Settings(BaseSettings):
    """Library settings using Pydantic for validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Resolution
    max_detour_depth: int = Field(
        default=DEFAULT_SETTINGS["max_detour_depth"],
        alias=f"{ENV_PREFIX}MAX_DETOUR_DEPTH",
        ge=1,
    )
    strict_booleans: bool = Field(
        default=DEFAULT_SETTINGS["strict_booleans"],
        alias=f"{ENV_PREFIX}STRICT_BOOLEANS",
    )

    # Logging
    log_level: str = Field(default=DEFAULT_SETTINGS["log_level"], alias=f"{ENV_PREFIX}LOG_LEVEL")
    environment: str = Field(default=DEFAULT_SETTINGS["environment"], alias=f"{ENV_PREFIX}ENVIRONMENT")

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("environment")
    @classmethod
    def _normalise_environment(cls, value: str) -> str:
        return value.lower()


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()

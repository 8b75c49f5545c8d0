"""Runtime configuration and logging setup for RouteWise."""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Defaults loaded from ``ROUTEWISE_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTEWISE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    avg_speed_kmph: float = Field(
        default=35.0,
        description="Average travel speed (km/h) used when a caller does not pass one.",
    )
    improvement_tolerance: float = Field(
        default=1e-6,
        ge=0.0,
        description="Minimum distance gain (meters) for a 2-opt move to be applied.",
    )
    log_level: LogLevel = Field(default="WARNING")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts and notebooks using this package."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

"""Typed configuration backed by environment variables."""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from flash_stats.config.constants import DEFAULT_INST_STATS_PERIOD
from flash_stats.errors import ConfigurationError

_DEFAULT_ENV_FILES: tuple[Path, ...] = (
    Path(".env"),
    Path("config/environments/.env"),
)


class Settings(BaseSettings):
    """Instrumentation configuration loaded from the environment and optional `.env` files."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="FLASH_STATS_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    inst_stats_period: int = Field(
        default=DEFAULT_INST_STATS_PERIOD,
        gt=0,
        description="Number of simulator events that make up one segment.",
    )
    strict_metrics: bool = Field(
        default=False,
        description="Reject increments of metric names outside the well-known set.",
    )
    retain_erased_keys: bool = Field(
        default=False,
        description="Keep a key's lifecycle record after erase instead of dropping it.",
    )
    classify_misses: bool = Field(
        default=True,
        description="Classify misses and inserts per key; False selects plain counting.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level.",
    )
    log_dir: Path | None = Field(
        default=None,
        description="Directory for rotating and JSON log files; console only when unset.",
    )


def _existing_env_files() -> list[str]:
    return [str(path) for path in _DEFAULT_ENV_FILES if path.exists()]


@lru_cache
def get_settings(_env_files: Sequence[str] | None = None) -> Settings:
    """Load settings once per process, respecting `.env` fallbacks."""
    env_files = list(_env_files) if _env_files is not None else _existing_env_files()
    try:
        if env_files:
            return Settings(_env_file=env_files)
        return Settings()
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid flash-stats configuration: {first.get('msg', exc)}",
            config_key=location or None,
            original_error=exc,
        ) from exc


__all__ = ["Settings", "get_settings"]

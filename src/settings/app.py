"""Ranking engine settings powered by Pydantic BaseSettings."""

import logging
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RankerSettings(BaseSettings):
    """Centralized environment configuration.

    Values are read from ``LANG_RANKER_*`` environment variables or a local
    ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LANG_RANKER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    log_level: str = Field(default="INFO")
    log_format: Literal["json", "console", "auto"] = Field(default="auto")
    weights_path: Path | None = Field(default=None)

    @property
    def log_level_number(self) -> int:
        """Return the numeric logging level for ``log_level``."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


def get_settings() -> RankerSettings:
    """Get a settings instance."""
    return RankerSettings()

"""
config.py — Environment-driven settings

Read once per process from DUNGAF_* environment variables:
    DUNGAF_LOG_LEVEL            logging level name (default WARNING)
    DUNGAF_REMOVAL_SET_BUDGET   max live removal sets during the
                                preferred-extension search (default 65536)
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

log = logging.getLogger("dungaf.config")

LOG_FORMAT = "%(asctime)s │ %(name)-14s │ %(levelname)-7s │ %(message)s"
LOG_DATEFMT = "%H:%M:%S"

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    log_level: str = "WARNING"
    removal_set_budget: int = Field(default=65_536, ge=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"log level must be one of {', '.join(_LEVELS)}")
        return level

    @classmethod
    def from_env(cls) -> Settings:
        values = {}
        level = os.environ.get("DUNGAF_LOG_LEVEL")
        if level:
            values["log_level"] = level
        budget = os.environ.get("DUNGAF_REMOVAL_SET_BUDGET")
        if budget:
            values["removal_set_budget"] = budget
        return cls(**values)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Process-wide settings, loaded from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
        log.debug(f"Loaded settings: {_settings.model_dump()}")
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next get_settings() re-reads the env."""
    global _settings
    _settings = None


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Install the root handler. Applications call this; the library never does."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

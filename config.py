# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Centralized configuration for game rules and environment variables."""

import logging
import os

from pydantic import BaseModel, ConfigDict, Field

LOG_LEVEL_ENV = "SHOWDOWN_LOG_LEVEL"
REGULATION_INNINGS_ENV = "SHOWDOWN_REGULATION_INNINGS"


class GameRules(BaseModel):
    """Rule constants the at-bat engine plays by."""
    model_config = ConfigDict(frozen=True)

    regulation_innings: int = Field(default=9, ge=1, description="Innings before a decided game ends")
    outs_per_inning: int = Field(default=3, ge=1)
    lineup_size: int = Field(default=9, ge=1)
    die_sides: int = Field(default=20, ge=2, description="Faces on the pitch and swing die")
    batters_per_inning_pitched: int = Field(default=3, ge=1)


def _int_from_env(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_rules() -> GameRules:
    """Return the default rules with any environment overrides applied."""
    overrides = {}
    innings = _int_from_env(REGULATION_INNINGS_ENV)
    if innings is not None:
        overrides["regulation_innings"] = innings
    return GameRules(**overrides)


def get_log_level() -> int:
    """Return the logging level named by the environment, or WARNING if not set."""
    name = os.environ.get(LOG_LEVEL_ENV, "WARNING").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"{LOG_LEVEL_ENV} is not a logging level: {name!r}")
    return level

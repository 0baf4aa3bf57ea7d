"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast


logger = logging.getLogger(__name__)

ParseStrategy = Literal["team_aware", "basic"]

PARSE_STRATEGIES: tuple[str, ...] = ("team_aware", "basic")

_DB_PATH_ENV = "RANKBOARD_DB_PATH"
_STRATEGY_ENV = "RANKBOARD_PARSE_STRATEGY"
_LOG_LEVEL_ENV = "RANKBOARD_LOG_LEVEL"

_STRATEGY_DEFAULT: ParseStrategy = "team_aware"
_LOG_LEVEL_DEFAULT = "INFO"


def default_db_path() -> Path:
    return Path.home() / ".rankboard" / "rankboard.sqlite"


@dataclass(frozen=True)
class Settings:
    db_path: str | None
    parse_strategy: ParseStrategy
    log_level: str


def _env_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value not in choices:
        logger.warning("Invalid value for %s: %s; using default %s", name, raw, default)
        return default
    return value


def _env_log_level(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().upper()
    if not isinstance(logging.getLevelName(value), int):
        logger.warning("Invalid log level for %s: %s; using default %s", name, raw, default)
        return default
    return value


def load_settings() -> Settings:
    db_path = os.getenv(_DB_PATH_ENV) or None
    strategy = _env_choice(_STRATEGY_ENV, _STRATEGY_DEFAULT, PARSE_STRATEGIES)
    return Settings(
        db_path=db_path,
        parse_strategy=cast(ParseStrategy, strategy),
        log_level=_env_log_level(_LOG_LEVEL_ENV, _LOG_LEVEL_DEFAULT),
    )

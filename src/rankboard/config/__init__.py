"""Static position data and runtime settings."""

from .positions import (
    DISPLAY_POSITIONS,
    POSITION_FULL_NAMES,
    POSITION_MATCH_ORDER,
    STORAGE_KEYS,
    TEAM_COLORS,
    StorageKeys,
    canonical_position,
    position_label,
    team_color,
)
from .settings import PARSE_STRATEGIES, ParseStrategy, Settings, default_db_path, load_settings

__all__ = [
    "DISPLAY_POSITIONS",
    "POSITION_FULL_NAMES",
    "POSITION_MATCH_ORDER",
    "STORAGE_KEYS",
    "TEAM_COLORS",
    "StorageKeys",
    "canonical_position",
    "position_label",
    "team_color",
    "PARSE_STRATEGIES",
    "ParseStrategy",
    "Settings",
    "default_db_path",
    "load_settings",
]

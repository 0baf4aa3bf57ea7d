"""Position codes, display groups and the team highlight palette."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple


# Checked in order; the first prefix whose remainder is empty or all digits wins.
POSITION_MATCH_ORDER: Tuple[str, ...] = ("QB", "RB", "WR", "TE", "K", "DST", "DEF")

POSITION_ALIASES: Mapping[str, str] = {"DEF": "DST"}

DISPLAY_POSITIONS: Tuple[str, ...] = ("QB", "RB", "WR", "TE", "K", "DST")

POSITION_FULL_NAMES: Mapping[str, str] = {
    "QB": "Quarterbacks",
    "RB": "Running Backs",
    "WR": "Wide Receivers",
    "TE": "Tight Ends",
    "K": "Kickers",
    "DST": "Defense/Special Teams",
}

TEAM_COLORS: Tuple[str, ...] = (
    "#0ea5e9",  # sky-500
    "#10b981",  # emerald-500
    "#f43f5e",  # rose-500
    "#f59e0b",  # amber-500
    "#8b5cf6",  # violet-500
    "#84cc16",  # lime-500
    "#ec4899",  # pink-500
    "#14b8a6",  # teal-500
)


@dataclass(frozen=True)
class StorageKeys:
    raw_text: str = "fantasyRankingsText"
    favorites: str = "fantasyFavorites"
    teams: str = "fantasyTeams"
    active_teams: str = "activeFantasyTeams"


STORAGE_KEYS = StorageKeys()


def canonical_position(code: str) -> str:
    """Return the canonical display code for a matched base code."""

    upper = code.upper()
    return POSITION_ALIASES.get(upper, upper)


def position_label(code: str) -> str:
    """Fetch the full group label for a display position, raising KeyError if unknown."""

    key = canonical_position(code)
    if key not in POSITION_FULL_NAMES:
        raise KeyError(f"No display group configured for position={code!r}")
    return POSITION_FULL_NAMES[key]


def team_color(index: int) -> str:
    return TEAM_COLORS[index % len(TEAM_COLORS)]

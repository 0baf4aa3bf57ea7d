"""Favorites, saved teams and position grouping on top of the durable store."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

from pydantic import ValidationError

from rankboard.config import DISPLAY_POSITIONS, STORAGE_KEYS, ParseStrategy, load_settings, team_color
from rankboard.ingest import ParseReport, parse_rankings_report
from rankboard.models import FantasyTeam, PlayerRecord
from rankboard.persistence import KeyValueStore


logger = logging.getLogger(__name__)


class TeamError(ValueError):
    """Raised when a team operation is rejected."""


def group_by_position(players: Iterable[PlayerRecord]) -> Dict[str, List[PlayerRecord]]:
    """Bucket players into the display positions, each bucket ordered by rank.

    Positions outside the display set are left out of every bucket.
    """

    grouped: Dict[str, List[PlayerRecord]] = {pos: [] for pos in DISPLAY_POSITIONS}
    for player in sorted(players, key=lambda p: p.rank):
        bucket = grouped.get(player.position.upper())
        if bucket is not None:
            bucket.append(player)
    return grouped


class RankingsBoard:
    def __init__(self, store: KeyValueStore, *, strategy: Optional[ParseStrategy] = None):
        self._store = store
        self._strategy: ParseStrategy = strategy or load_settings().parse_strategy

    @property
    def raw_text(self) -> str:
        return self._store.get(STORAGE_KEYS.raw_text, "") or ""

    def save_raw_text(self, text: str) -> None:
        self._store.set(STORAGE_KEYS.raw_text, text)

    def load_players(self, strategy: Optional[ParseStrategy] = None) -> ParseReport:
        text = self.raw_text
        if not text.strip():
            return ParseReport()
        return parse_rankings_report(text, strategy=strategy or self._strategy)

    def _string_list(self, key: str) -> List[str]:
        value = self._store.get_json(key, [])
        if not isinstance(value, list):
            logger.warning("Expected a list under %s, found %s; resetting", key, type(value).__name__)
            return []
        return [str(item) for item in value]

    def favorites(self) -> List[str]:
        return self._string_list(STORAGE_KEYS.favorites)

    def toggle_favorite(self, player_name: str) -> bool:
        favorites = self.favorites()
        if player_name in favorites:
            favorites.remove(player_name)
            now_favorite = False
        else:
            favorites.append(player_name)
            now_favorite = True
        self._store.set_json(STORAGE_KEYS.favorites, favorites)
        return now_favorite

    def teams(self) -> List[FantasyTeam]:
        raw = self._store.get_json(STORAGE_KEYS.teams, [])
        teams: List[FantasyTeam] = []
        for item in raw if isinstance(raw, list) else []:
            try:
                teams.append(FantasyTeam.model_validate(item))
            except ValidationError as exc:
                logger.warning("Dropping invalid stored team %r: %s", item, exc)
        return teams

    def _save_teams(self, teams: Sequence[FantasyTeam]) -> None:
        self._store.set_json(STORAGE_KEYS.teams, [team.model_dump(mode="json") for team in teams])

    def _find_team(self, team_name: str) -> FantasyTeam | None:
        return next((team for team in self.teams() if team.name == team_name), None)

    def create_team(self, team_name: str) -> FantasyTeam:
        trimmed = team_name.strip()
        favorites = self.favorites()
        if not favorites:
            raise TeamError("Please favorite players to create a team.")
        if not trimmed:
            raise TeamError("Please enter a team name.")
        teams = self.teams()
        if any(team.name.lower() == trimmed.lower() for team in teams):
            raise TeamError("A team with this name already exists.")

        team = FantasyTeam(name=trimmed, players=tuple(favorites), color=team_color(len(teams)))
        self._save_teams([*teams, team])
        self._store.set_json(STORAGE_KEYS.favorites, [])
        logger.info("Created team %s with %d players", team.name, len(team.players))
        return team

    def delete_team(self, team_name: str) -> bool:
        teams = self.teams()
        remaining = [team for team in teams if team.name != team_name]
        if len(remaining) == len(teams):
            return False
        self._save_teams(remaining)
        active = [name for name in self.active_team_names() if name != team_name]
        self._store.set_json(STORAGE_KEYS.active_teams, active)
        return True

    def active_team_names(self) -> List[str]:
        return self._string_list(STORAGE_KEYS.active_teams)

    def toggle_team(self, team_name: str) -> bool:
        if self._find_team(team_name) is None:
            raise TeamError(f"No team named {team_name!r}")
        active = self.active_team_names()
        if team_name in active:
            active.remove(team_name)
            now_active = False
        else:
            active.append(team_name)
            now_active = True
        self._store.set_json(STORAGE_KEYS.active_teams, active)
        return now_active

    def _active_teams(self) -> List[FantasyTeam]:
        active = set(self.active_team_names())
        return [team for team in self.teams() if team.name in active]

    def active_team_player_names(self) -> Set[str]:
        names: Set[str] = set()
        for team in self._active_teams():
            names.update(team.players)
        return names

    def highlight_colors(self) -> Dict[str, List[str]]:
        colors: Dict[str, List[str]] = {}
        for team in self._active_teams():
            for player_name in team.players:
                colors.setdefault(player_name, []).append(team.color)
        return colors

    def filter_players(self, players: Sequence[PlayerRecord], *, hide_unselected: bool) -> List[PlayerRecord]:
        if not hide_unselected:
            return list(players)
        selected = set(self.favorites()) | self.active_team_player_names()
        return [player for player in players if player.name in selected]

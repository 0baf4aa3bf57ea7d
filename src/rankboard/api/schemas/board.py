from __future__ import annotations

from pydantic import BaseModel, Field

from rankboard.models import FantasyTeam, PlayerRecord


class PositionGroupResponse(BaseModel):
    position: str
    label: str
    players: list[PlayerRecord]


class BoardResponse(BaseModel):
    groups: list[PositionGroupResponse]
    total_players: int
    favorites: list[str]
    active_teams: list[str]
    highlight_colors: dict[str, list[str]] = Field(default_factory=dict)
    skipped_lines: list[str] = Field(default_factory=list)
    error: str | None = None


class FavoriteToggleRequest(BaseModel):
    name: str = Field(..., min_length=1)


class FavoritesResponse(BaseModel):
    favorites: list[str]


class TeamCreateRequest(BaseModel):
    name: str


class TeamResponse(BaseModel):
    name: str
    players: list[str]
    color: str
    active: bool = False

    @classmethod
    def from_team(cls, team: FantasyTeam, *, active: bool) -> "TeamResponse":
        return cls(name=team.name, players=list(team.players), color=team.color, active=active)

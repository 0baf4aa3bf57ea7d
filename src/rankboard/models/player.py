"""Canonical player and team models shared across ingestion, board and API layers."""

from __future__ import annotations

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


PositionCode = Literal["QB", "RB", "WR", "TE", "K", "DST"]


class PlayerRecord(BaseModel):
    """One parsed ranking line."""

    rank: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    position: PositionCode
    positional_rank: Optional[int] = Field(default=None, ge=1)
    team: Optional[str] = Field(default=None, pattern=r"^[A-Z]{2,3}$")

    model_config = ConfigDict(frozen=True)


class FantasyTeam(BaseModel):
    """A saved group of favorited player names."""

    name: str = Field(..., min_length=1)
    players: Tuple[str, ...] = ()
    color: str

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("team name must not be blank")
        return stripped

    @field_validator("players")
    @classmethod
    def _sort_players(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(sorted(value))

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from rankboard.models import PlayerRecord


class ParseRequest(BaseModel):
    text: str
    strategy: Literal["team_aware", "basic"] | None = None


class ParseResponse(BaseModel):
    players: list[PlayerRecord]
    total_players: int


class RawTextPayload(BaseModel):
    text: str = ""

"""Pydantic models for API I/O."""

from .board import (
    BoardResponse,
    FavoriteToggleRequest,
    FavoritesResponse,
    PositionGroupResponse,
    TeamCreateRequest,
    TeamResponse,
)
from .rankings import ParseRequest, ParseResponse, RawTextPayload

__all__ = [
    "BoardResponse",
    "FavoriteToggleRequest",
    "FavoritesResponse",
    "PositionGroupResponse",
    "TeamCreateRequest",
    "TeamResponse",
    "ParseRequest",
    "ParseResponse",
    "RawTextPayload",
]

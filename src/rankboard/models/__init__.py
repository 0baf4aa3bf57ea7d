"""Pydantic models for parsed rankings and saved teams."""

from .player import FantasyTeam, PlayerRecord, PositionCode

__all__ = ["FantasyTeam", "PlayerRecord", "PositionCode"]

"""Board state: favorites, saved teams and grouped views of parsed rankings."""

from .service import RankingsBoard, TeamError, group_by_position

__all__ = ["RankingsBoard", "TeamError", "group_by_position"]

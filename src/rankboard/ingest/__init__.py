"""Input adapters that normalize pasted ranking text."""

from .rankings import (
    PARSE_FAILURE_MESSAGE,
    ParseReport,
    PositionMatch,
    RankingsParseError,
    is_team_token,
    match_position,
    parse_line,
    parse_rankings,
    parse_rankings_async,
    parse_rankings_report,
    strip_matchup,
)

__all__ = [
    "PARSE_FAILURE_MESSAGE",
    "ParseReport",
    "PositionMatch",
    "RankingsParseError",
    "is_team_token",
    "match_position",
    "parse_line",
    "parse_rankings",
    "parse_rankings_async",
    "parse_rankings_report",
    "strip_matchup",
]

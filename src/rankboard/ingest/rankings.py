"""Turn pasted, whitespace-delimited ranking lists into canonical player records."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from rankboard.config import PARSE_STRATEGIES, POSITION_MATCH_ORDER, ParseStrategy, canonical_position
from rankboard.models import PlayerRecord


logger = logging.getLogger(__name__)

PARSE_FAILURE_MESSAGE = "Failed to parse rankings from text. Please check the format."

_MATCHUP_PATTERN = re.compile(r" vs | @ ")
_DIGITS_PATTERN = re.compile(r"[0-9]*")
_RANK_PATTERN = re.compile(r"[0-9]+")
_TEAM_PATTERN = re.compile(r"[A-Z]{2,3}")


class RankingsParseError(ValueError):
    """Raised when a whole batch of ranking text could not be processed."""


@dataclass(frozen=True)
class PositionMatch:
    base: str
    positional_rank: Optional[int] = None


@dataclass(frozen=True)
class ParseReport:
    players: List[PlayerRecord] = field(default_factory=list)
    total_lines: int = 0
    skipped_lines: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def match_position(token: str) -> Optional[PositionMatch]:
    """Match tokens such as ``QB``, ``wr3`` or ``DEF1`` to a base position.

    The remainder after the position prefix must be empty or all digits; any
    other suffix rejects that prefix and the next one is tried. ``DEF`` is
    reported as ``DST``. A positional rank of zero is treated as absent.
    """

    if not token:
        return None
    upper = token.upper()
    for code in POSITION_MATCH_ORDER:
        if not upper.startswith(code):
            continue
        rest = upper[len(code):]
        if not _DIGITS_PATTERN.fullmatch(rest):
            continue
        positional_rank = int(rest) if rest else None
        return PositionMatch(
            base=canonical_position(code),
            positional_rank=positional_rank or None,
        )
    return None


def is_team_token(token: str) -> bool:
    """Return True for a raw 2-3 letter uppercase team abbreviation like ``KC`` or ``SEA``."""

    if not token:
        return False
    return _TEAM_PATTERN.fullmatch(token) is not None


def strip_matchup(line: str) -> str:
    """Drop a trailing opponent annotation (``vs DEN`` / ``@ KC``)."""

    return _MATCHUP_PATTERN.split(line, maxsplit=1)[0]


def _parse_rank(token: str) -> Optional[int]:
    if token.endswith((".", ")")):
        token = token[:-1]
    if not _RANK_PATTERN.fullmatch(token):
        return None
    rank = int(token)
    return rank if rank >= 1 else None


def _check_strategy(strategy: str) -> None:
    if strategy not in PARSE_STRATEGIES:
        raise ValueError(f"Unknown parse strategy {strategy!r}; expected one of {', '.join(PARSE_STRATEGIES)}")


def _skip(line: str, reason: str) -> None:
    logger.debug("Skipping ranking line %r: %s", line, reason)
    return None


def _resolve_basic(tokens: Sequence[str]) -> Tuple[Optional[PositionMatch], Optional[str], int]:
    for index in range(len(tokens) - 1, -1, -1):
        position = match_position(tokens[index])
        if position is not None:
            return position, None, index
    return None, None, len(tokens)


def _resolve_team_aware(tokens: Sequence[str]) -> Tuple[Optional[PositionMatch], Optional[str], int]:
    name_end = len(tokens)
    last = tokens[-1]
    second_last = tokens[-2] if len(tokens) > 1 else None

    last_position = match_position(last)
    if last_position is not None:
        if second_last is not None and is_team_token(second_last):
            return last_position, second_last.upper(), name_end - 2
        return last_position, None, name_end - 1

    if is_team_token(last):
        second_position = match_position(second_last) if second_last is not None else None
        if second_position is not None:
            return second_position, last.upper(), name_end - 2
        return None, last.upper(), name_end

    return None, None, name_end


def parse_line(line: str, *, strategy: ParseStrategy = "team_aware") -> Optional[PlayerRecord]:
    """Parse a single ranking line, returning None when it cannot be resolved."""

    _check_strategy(strategy)
    text = line.replace("\t", " ") if strategy == "team_aware" else line
    tokens = strip_matchup(text).split()
    if len(tokens) < 2:
        return _skip(line, "fewer than two tokens")

    rank = _parse_rank(tokens[0])
    if rank is None:
        return _skip(line, f"leading token {tokens[0]!r} is not a rank")

    rest = tokens[1:]
    if strategy == "basic":
        position, team, name_end = _resolve_basic(rest)
    else:
        position, team, name_end = _resolve_team_aware(rest)

    if position is None:
        if team is not None:
            return _skip(line, f"team {team!r} has no adjacent position")
        return _skip(line, "no position token")
    if name_end <= 0:
        return _skip(line, "empty player name")

    return PlayerRecord(
        rank=rank,
        name=" ".join(rest[:name_end]),
        position=position.base,
        positional_rank=position.positional_rank,
        team=team,
    )


def _parse_lines(text: str, strategy: ParseStrategy) -> Tuple[List[PlayerRecord], List[str], int]:
    players: List[PlayerRecord] = []
    skipped: List[str] = []
    total = 0
    for line in text.split("\n"):
        if not line.strip():
            continue
        total += 1
        record = parse_line(line, strategy=strategy)
        if record is None:
            skipped.append(line)
        else:
            players.append(record)
    return players, skipped, total


def parse_rankings(text: str, *, strategy: ParseStrategy = "team_aware") -> List[PlayerRecord]:
    """Parse every non-blank line of ``text``, keeping input order.

    Lines that cannot be resolved are dropped. An unexpected failure anywhere
    in the batch raises :class:`RankingsParseError` and no partial results are
    returned.
    """

    _check_strategy(strategy)
    try:
        players, skipped, total = _parse_lines(text, strategy)
    except Exception as exc:
        logger.exception("Error during ranking text parsing")
        raise RankingsParseError(PARSE_FAILURE_MESSAGE) from exc
    logger.debug("Parsed %d/%d ranking lines (%d skipped)", len(players), total, len(skipped))
    return players


def parse_rankings_report(text: str, *, strategy: ParseStrategy = "team_aware") -> ParseReport:
    """Like :func:`parse_rankings` but reports failure in the result instead of raising."""

    _check_strategy(strategy)
    try:
        players, skipped, total = _parse_lines(text, strategy)
    except Exception:
        logger.exception("Error during ranking text parsing")
        return ParseReport(error=PARSE_FAILURE_MESSAGE)
    return ParseReport(players=players, total_lines=total, skipped_lines=skipped)


async def parse_rankings_async(text: str, *, strategy: ParseStrategy = "team_aware") -> List[PlayerRecord]:
    return parse_rankings(text, strategy=strategy)

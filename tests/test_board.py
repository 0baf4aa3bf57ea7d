from pathlib import Path

import pytest

from rankboard.board import RankingsBoard, TeamError, group_by_position
from rankboard.config import DISPLAY_POSITIONS, STORAGE_KEYS, TEAM_COLORS
from rankboard.models import PlayerRecord
from rankboard.persistence import KeyValueStore


RANKINGS = """1. Christian McCaffrey SF RB1
2. CeeDee Lamb WR1 DAL
3 Tyreek Hill MIA WR2
4 Josh Allen BUF QB1
5 Travis Kelce KC TE1
6 Justin Tucker BAL K1
7 San Francisco DEF
not a ranking line
"""


@pytest.fixture
def store(tmp_path: Path, monkeypatch) -> KeyValueStore:
    monkeypatch.delenv("RANKBOARD_DB_PATH", raising=False)
    return KeyValueStore(tmp_path / "board.sqlite")


@pytest.fixture
def board(store: KeyValueStore) -> RankingsBoard:
    return RankingsBoard(store, strategy="team_aware")


def _player(rank: int, name: str, position: str) -> PlayerRecord:
    return PlayerRecord(rank=rank, name=name, position=position)


def test_load_players_parses_stored_text(board: RankingsBoard):
    assert board.load_players().players == []

    board.save_raw_text(RANKINGS)
    report = board.load_players()

    assert board.raw_text == RANKINGS
    assert len(report.players) == 7
    assert report.skipped_lines == ["not a ranking line"]
    assert report.players[-1].position == "DST"


def test_toggle_favorite(board: RankingsBoard):
    assert board.toggle_favorite("Josh Allen") is True
    assert board.toggle_favorite("Tyreek Hill") is True
    assert board.favorites() == ["Josh Allen", "Tyreek Hill"]

    assert board.toggle_favorite("Josh Allen") is False
    assert board.favorites() == ["Tyreek Hill"]


def test_create_team_requires_favorites_and_name(board: RankingsBoard):
    with pytest.raises(TeamError):
        board.create_team("Sunday Squad")

    board.toggle_favorite("Josh Allen")
    with pytest.raises(TeamError):
        board.create_team("   ")


def test_create_team_uses_sorted_favorites_and_clears_them(board: RankingsBoard):
    board.toggle_favorite("Tyreek Hill")
    board.toggle_favorite("Josh Allen")

    team = board.create_team("  Sunday Squad ")

    assert team.name == "Sunday Squad"
    assert team.players == ("Josh Allen", "Tyreek Hill")
    assert team.color == TEAM_COLORS[0]
    assert board.favorites() == []
    assert board.teams() == [team]

    board.toggle_favorite("Travis Kelce")
    second = board.create_team("Backups")
    assert second.color == TEAM_COLORS[1]


def test_create_team_rejects_duplicate_name_case_insensitive(board: RankingsBoard):
    board.toggle_favorite("Josh Allen")
    board.create_team("Sunday Squad")

    board.toggle_favorite("Tyreek Hill")
    with pytest.raises(TeamError):
        board.create_team("sunday squad")
    assert board.favorites() == ["Tyreek Hill"]


def test_toggle_and_delete_team(board: RankingsBoard):
    board.toggle_favorite("Josh Allen")
    board.create_team("Sunday Squad")

    assert board.toggle_team("Sunday Squad") is True
    assert board.active_team_names() == ["Sunday Squad"]
    assert board.active_team_player_names() == {"Josh Allen"}

    assert board.delete_team("Sunday Squad") is True
    assert board.teams() == []
    assert board.active_team_names() == []
    assert board.delete_team("Sunday Squad") is False


def test_toggle_unknown_team_raises(board: RankingsBoard):
    with pytest.raises(TeamError):
        board.toggle_team("Nobody")


def test_highlight_colors_follow_saved_team_order(board: RankingsBoard):
    board.toggle_favorite("Josh Allen")
    board.toggle_favorite("Tyreek Hill")
    board.create_team("Alpha")
    board.toggle_favorite("Josh Allen")
    board.create_team("Bravo")
    board.toggle_favorite("Travis Kelce")
    board.create_team("Charlie")

    board.toggle_team("Bravo")
    board.toggle_team("Alpha")

    colors = board.highlight_colors()
    assert colors == {
        "Josh Allen": [TEAM_COLORS[0], TEAM_COLORS[1]],
        "Tyreek Hill": [TEAM_COLORS[0]],
    }


def test_filter_players_hides_unselected(board: RankingsBoard):
    players = [
        _player(1, "Josh Allen", "QB"),
        _player(2, "Tyreek Hill", "WR"),
        _player(3, "Travis Kelce", "TE"),
    ]
    board.toggle_favorite("Tyreek Hill")
    board.create_team("Alpha")
    board.toggle_team("Alpha")
    board.toggle_favorite("Travis Kelce")

    assert board.filter_players(players, hide_unselected=False) == players
    visible = board.filter_players(players, hide_unselected=True)
    assert [p.name for p in visible] == ["Tyreek Hill", "Travis Kelce"]


def test_invalid_stored_teams_are_dropped(store: KeyValueStore, board: RankingsBoard):
    store.set_json(
        STORAGE_KEYS.teams,
        [
            {"name": "", "players": [], "color": "#0ea5e9"},
            {"name": "Alpha", "players": ["Josh Allen"], "color": "#10b981"},
        ],
    )

    assert [team.name for team in board.teams()] == ["Alpha"]


def test_group_by_position_sorts_by_rank_and_omits_other_positions():
    players = [
        _player(9, "Tyreek Hill", "WR"),
        _player(2, "CeeDee Lamb", "WR"),
        _player(4, "Josh Allen", "QB"),
        PlayerRecord.model_construct(rank=1, name="Flex Guy", position="FLEX"),
    ]

    grouped = group_by_position(players)

    assert list(grouped) == list(DISPLAY_POSITIONS)
    assert [p.name for p in grouped["WR"]] == ["CeeDee Lamb", "Tyreek Hill"]
    assert [p.name for p in grouped["QB"]] == ["Josh Allen"]
    assert grouped["K"] == []
    assert all(p.name != "Flex Guy" for bucket in grouped.values() for p in bucket)

import pytest
from pydantic import ValidationError

from rankboard.models import FantasyTeam, PlayerRecord


def test_player_record_is_frozen():
    record = PlayerRecord(rank=1, name="Josh Allen", position="QB", positional_rank=1, team="BUF")

    assert record.rank == 1
    assert record.team == "BUF"

    with pytest.raises((TypeError, ValidationError)):
        record.rank = 2  # type: ignore[misc]


def test_player_record_optional_fields_default_to_none():
    record = PlayerRecord(rank=4, name="Breece Hall", position="RB")

    assert record.positional_rank is None
    assert record.team is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"rank": 0},
        {"name": ""},
        {"position": "FLEX"},
        {"positional_rank": 0},
        {"team": "kc"},
        {"team": "SEAH"},
    ],
)
def test_player_record_rejects_invalid_fields(overrides):
    data = {"rank": 1, "name": "Josh Allen", "position": "QB"}
    data.update(overrides)

    with pytest.raises(ValidationError):
        PlayerRecord(**data)


def test_fantasy_team_sorts_players_and_trims_name():
    team = FantasyTeam(name="  Sunday Squad ", players=["Tyreek Hill", "Josh Allen"], color="#0ea5e9")

    assert team.name == "Sunday Squad"
    assert team.players == ("Josh Allen", "Tyreek Hill")


def test_fantasy_team_rejects_blank_name():
    with pytest.raises(ValidationError):
        FantasyTeam(name="   ", players=[], color="#0ea5e9")

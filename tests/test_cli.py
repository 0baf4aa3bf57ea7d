import csv
import json
from io import StringIO
from pathlib import Path

import pytest

from rankboard import cli
from rankboard.ingest import PARSE_FAILURE_MESSAGE
from rankboard.ingest import rankings as rankings_module


@pytest.fixture
def rankings_file(tmp_path: Path) -> Path:
    path = tmp_path / "rankings.txt"
    path.write_text(
        "1 Josh Allen BUF QB1\n"
        "2 Breece Hall RB1 NYJ\n"
        "garbage line\n"
        "3 Jalen Hurts QB2 @ DAL\n",
        encoding="utf-8",
    )
    return path


def test_cli_json_output(rankings_file: Path, capsys):
    assert cli.main([str(rankings_file)]) == 0

    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert [p["name"] for p in payload] == ["Josh Allen", "Breece Hall", "Jalen Hurts"]
    assert payload[1]["team"] == "NYJ"
    assert "Skipped 1" in captured.err


def test_cli_grouped_json(rankings_file: Path, capsys):
    assert cli.main([str(rankings_file), "--group"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert list(payload) == ["QB", "RB", "WR", "TE", "K", "DST"]
    assert [p["name"] for p in payload["QB"]] == ["Josh Allen", "Jalen Hurts"]


def test_cli_csv_output_and_report(rankings_file: Path, tmp_path: Path):
    output = tmp_path / "players.csv"
    report = tmp_path / "report.json"

    assert cli.main([str(rankings_file), "--format", "csv", "--output", str(output), "--report", str(report)]) == 0

    rows = list(csv.DictReader(StringIO(output.read_text(encoding="utf-8"))))
    assert rows[0] == {"rank": "1", "name": "Josh Allen", "position": "QB", "positional_rank": "1", "team": "BUF"}
    assert rows[2]["team"] == ""
    summary = json.loads(report.read_text(encoding="utf-8"))
    assert summary["total_lines"] == 4
    assert summary["parsed_players"] == 3
    assert summary["skipped_lines"] == ["garbage line"]


def test_cli_basic_strategy(rankings_file: Path, capsys):
    assert cli.main([str(rankings_file), "--strategy", "basic"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert all(p["team"] is None for p in payload)
    assert payload[0]["name"] == "Josh Allen BUF"


def test_cli_missing_file(tmp_path: Path, capsys):
    assert cli.main([str(tmp_path / "missing.txt")]) == 1
    assert "Unable to read" in capsys.readouterr().err


def test_cli_batch_failure(rankings_file: Path, capsys, monkeypatch):
    def boom(line, *, strategy="team_aware"):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(rankings_module, "parse_line", boom)

    assert cli.main([str(rankings_file)]) == 1
    assert PARSE_FAILURE_MESSAGE in capsys.readouterr().err


def test_cli_rejects_non_utf8_input(tmp_path: Path, capsys):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"1 Jos\xe9 Allen QB1\n")

    assert cli.main([str(path)]) == 1
    assert "Unable to read" in capsys.readouterr().err


def test_cli_group_requires_json(rankings_file: Path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(rankings_file), "--format", "csv", "--group"])

    assert excinfo.value.code == 2
    assert "--group is only supported with --format json" in capsys.readouterr().err

"""Command-line interface for parsing pasted ranking lists."""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from io import StringIO
from pathlib import Path
from typing import Sequence

from rankboard.board import group_by_position
from rankboard.config import PARSE_STRATEGIES, load_settings
from rankboard.ingest import ParseReport, parse_rankings_report
from rankboard.models import PlayerRecord


CSV_COLUMNS = ["rank", "name", "position", "positional_rank", "team"]


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Parse a pasted fantasy ranking list into player records")
    parser.add_argument("input", help="Path to rankings text, or - for stdin")
    parser.add_argument(
        "--strategy",
        choices=PARSE_STRATEGIES,
        default=settings.parse_strategy,
        help="Line resolution strategy (default from RANKBOARD_PARSE_STRATEGY)",
    )
    parser.add_argument("--format", choices=("json", "csv"), default="json", help="Output format")
    parser.add_argument("--output", type=Path, default=None, help="Write output here instead of stdout")
    parser.add_argument(
        "--group",
        action="store_true",
        help="Group players by display position (JSON only)",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write a parse summary JSON",
    )
    args = parser.parse_args(argv)
    if args.group and args.format != "json":
        parser.error("--group is only supported with --format json")
    return args


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def render_csv(players: Sequence[PlayerRecord]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_COLUMNS)
    for player in players:
        writer.writerow([
            player.rank,
            player.name,
            player.position,
            "" if player.positional_rank is None else player.positional_rank,
            player.team or "",
        ])
    return buffer.getvalue()


def render_json(players: Sequence[PlayerRecord], *, group: bool = False) -> str:
    if group:
        payload = {
            position: [player.model_dump() for player in bucket]
            for position, bucket in group_by_position(players).items()
        }
    else:
        payload = [player.model_dump() for player in players]
    return json.dumps(payload, indent=2)


def _write_report(path: Path, report: ParseReport) -> None:
    payload = {
        "total_lines": report.total_lines,
        "parsed_players": len(report.players),
        "skipped_lines": report.skipped_lines,
    }
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=load_settings().log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        text = _read_input(args.input)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Unable to read {args.input}: {exc}", file=sys.stderr)
        return 1

    report = parse_rankings_report(text, strategy=args.strategy)
    if report.error:
        print(report.error, file=sys.stderr)
        return 1

    players = report.players
    if report.skipped_lines:
        print(f"Skipped {len(report.skipped_lines)} unparsable line(s)", file=sys.stderr)
    if args.report:
        _write_report(args.report, report)
        print(f"Wrote parse report to {args.report}", file=sys.stderr)

    if args.format == "csv":
        output = render_csv(players)
    else:
        output = render_json(players, group=args.group)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote {len(players)} players to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)
        if not output.endswith("\n"):
            sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
